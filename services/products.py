from services.base import ResourceService


class ProductService(ResourceService):
    path = "/api/products"
