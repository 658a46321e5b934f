from .user import UserDAO
from .product import ProductDAO
from .user_session import UserSessionDAO

__all__ = [
    "UserDAO",
    "ProductDAO",
    "UserSessionDAO",
]
