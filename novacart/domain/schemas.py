# novacart/domain/schemas.py
from datetime import datetime
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _coerce_id(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


# =====================================================
# CATALOG
# =====================================================
class Product(CamelModel):
    """Catalog product as stored in mongo and in the snapshot file."""

    kind: Literal["product"] = "product"
    id: str
    sku: str = ""
    name: str
    price: float
    category: str = ""
    description: str = ""
    stock: int = 0
    is_featured: bool = False
    image_urls: List[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value):
        return _coerce_id(value)


class UnknownProduct(CamelModel):
    """Placeholder for a cart line whose product is no longer resolvable."""

    kind: Literal["unknown"] = "unknown"
    id: str
    name: str = "Unknown Product"
    price: float = 0.0
    image_urls: List[str] = Field(default_factory=list)


CatalogItem = Annotated[Union[Product, UnknownProduct], Field(discriminator="kind")]


class ProductQuery(CamelModel):
    search: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: Literal["price", "name", "createdAt"] = "name"
    sort_order: Literal["asc", "desc"] = "asc"
    skip: int = 0
    take: int = 10


class ProductPage(CamelModel):
    count: int
    data: List[Product]


class ProductListOut(ProductPage):
    message: str = "Products fetched successfully"


class ProductOut(CamelModel):
    data: Product
    message: str = "Product fetched successfully"


# =====================================================
# AUTH
# =====================================================
class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str


class AuthOut(CamelModel):
    message: str
    user: UserOut
    token: str


class TokenPayload(BaseModel):
    user_id: int
    role: str


# =====================================================
# CART
# =====================================================
class CartItemIn(CamelModel):
    """Add-to-cart body. Quantity is added to an existing line."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)

    @field_validator("product_id", mode="before")
    @classmethod
    def id_as_str(cls, value):
        return _coerce_id(value)


class CartItemUpdateIn(CamelModel):
    """Update body. Quantity <= 0 removes the line."""

    product_id: str = Field(..., min_length=1)
    quantity: int

    @field_validator("product_id", mode="before")
    @classmethod
    def id_as_str(cls, value):
        return _coerce_id(value)


class CartLineOut(CamelModel):
    id: int
    cart_id: int
    product_id: str
    quantity: int
    product: CatalogItem


class CartOut(CamelModel):
    id: int
    user_id: int
    items: List[CartLineOut]
    total: float


# =====================================================
# ORDERS
# =====================================================
class OrderItemOut(CamelModel):
    id: int
    product_id: str
    quantity: int
    price_at_purchase: float


class OrderOut(CamelModel):
    id: int
    user_id: int
    total: float
    status: str
    created_at: datetime
    items: List[OrderItemOut]
