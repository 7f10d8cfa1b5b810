from revenuecat.services.base import BaseService
from revenuecat.services.customers import CUSTOMER_ENDPOINTS, CustomerService

__all__ = [
    "BaseService",
    "CustomerService",
    "CUSTOMER_ENDPOINTS",
]
