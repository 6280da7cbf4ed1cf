from services.base import ResourceService


class OrderService(ResourceService):
    path = "/api/orders"
