from .auth import (
    get_password_hash,
    verify_password,
    authenticate_user,
    create_session_token,
    login_session,
    logout_session,
)
from .export import products_to_csv

__all__ = [
    "get_password_hash",
    "verify_password",
    "authenticate_user",
    "create_session_token",
    "login_session",
    "logout_session",
    "products_to_csv",
]
