from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SProductForm(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)

    @field_validator("price", mode="before")
    @classmethod
    def blank_price_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SProductOwner(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(
        from_attributes=True
    )


class SProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    user_id: int
    owner: Optional[SProductOwner] = None

    model_config = ConfigDict(
        from_attributes=True
    )


class SProductDetail(SProductResponse):
    is_owner: bool = False
