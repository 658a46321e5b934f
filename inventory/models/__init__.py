from .user import User
from .product import Product
from .user_session import UserSession

__all__ = [
    "User",
    "Product",
    "UserSession",
]
