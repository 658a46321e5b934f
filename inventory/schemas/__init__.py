from .user import SUserRegister, SUserAuth, RequestContext
from .product import SProductForm, SProductOwner, SProductResponse, SProductDetail

__all__ = [
    "SUserRegister",
    "SUserAuth",
    "RequestContext",
    "SProductForm",
    "SProductOwner",
    "SProductResponse",
    "SProductDetail",
]
