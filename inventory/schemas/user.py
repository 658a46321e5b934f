from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class SUserRegister(BaseModel):
    username: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Username, unique",
    )
    email: EmailStr = Field(..., description="Email address, unique")
    password: str = Field(..., min_length=1, description="Plain password")


class SUserAuth(BaseModel):
    username: str
    password: str


class RequestContext(BaseModel):
    """Who is making the current request, looked up from the session cookie."""

    user_id: Optional[int] = None
    username: Optional[str] = None
    session_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
