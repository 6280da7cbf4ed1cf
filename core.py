from api_client import ApiClient
from auth.session import AuthSession
from auth.token_store import TokenStore
from config import Settings, get_settings
from services.cheques import ChequeService
from services.chat import ChatService
from services.customers import CustomerService
from services.imports import ImportService
from services.orders import OrderService
from services.products import ProductService
from services.profile import ProfileService
from services.purchase_orders import PurchaseOrderService
from services.settings import SettingsService
from services.suppliers import SupplierService
from stores.cheque_store import ChequeQuery
from stores.settings_store import SettingsStore


class AppState:
    def __init__(self, settings: Settings | None = None, on_logged_out=None):
        self.settings = settings or get_settings()
        self.server_url: str = self.settings.api_url
        # Auth / Server
        self.token_store = TokenStore(self.settings.token_file)
        self.api_client = ApiClient(
            self.server_url,
            self.token_store,
            timeout=self.settings.request_timeout,
            refresh_path=self.settings.refresh_path,
        )
        self.session = AuthSession(self.api_client, on_logged_out=on_logged_out)
        # Domain services
        self.products = ProductService(self.api_client)
        self.orders = OrderService(self.api_client)
        self.customers = CustomerService(self.api_client)
        self.suppliers = SupplierService(self.api_client)
        self.purchase_orders = PurchaseOrderService(self.api_client)
        self.cheques = ChequeService(self.api_client)
        self.profile = ProfileService(self.api_client)
        self.chat = ChatService(self.api_client)
        self.imports = ImportService(self.api_client)
        self.settings_api = SettingsService(self.api_client)
        # Client-side stores
        self.settings_store = SettingsStore(self.settings_api)
        self.cheque_query = ChequeQuery()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    async def close(self):
        await self.api_client.close()
