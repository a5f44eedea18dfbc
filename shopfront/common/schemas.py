"""Product and account payload schemas for API validation."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import AnyUrl, BaseModel, EmailStr, Field, TypeAdapter, ValidationError, field_validator, model_validator

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _reject_null(value: Any) -> Any:
    # Optional fields may be omitted, but an explicit null is not a value.
    if value is None:
        raise ValueError("Field may not be null")
    return value


def _ensure_distinct_variant_ids(variants: Optional[List["VariantIn"]]) -> None:
    seen = set()
    for variant in variants or []:
        if variant.id is None:
            continue
        if variant.id in seen:
            raise ValueError(f"Duplicate variant id '{variant.id}'")
        seen.add(variant.id)


class VariantIn(BaseModel):
    """A purchasable variant; price is required and strictly positive."""
    id: Optional[str] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Variant price")
    compare_at_price: Optional[float] = Field(None, allow_inf_nan=False)
    inventory_quantity: Optional[int] = Field(None, ge=0)
    requires_shipping: Optional[bool] = None
    taxable: Optional[bool] = None
    option_values: Optional[List[str]] = None

    @field_validator(
        "id", "sku", "title", "inventory_quantity", "requires_shipping", "taxable", "option_values",
        mode="before",
    )
    @classmethod
    def not_null(cls, v):
        return _reject_null(v)


class OptionIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, description="Option name, e.g. Size")
    values: List[str] = Field(..., min_length=1, description="Selectable values")

    @field_validator("id", mode="before")
    @classmethod
    def not_null(cls, v):
        return _reject_null(v)


class ImageIn(BaseModel):
    id: Optional[str] = None
    src: str = Field(..., description="Absolute image URL")
    alt: Optional[str] = None
    width: Optional[float] = Field(None, allow_inf_nan=False)
    height: Optional[float] = Field(None, allow_inf_nan=False)

    @field_validator("id", "alt", "width", "height", mode="before")
    @classmethod
    def not_null(cls, v):
        return _reject_null(v)

    @field_validator("src")
    @classmethod
    def validate_src(cls, v: str) -> str:
        # Validate only; the caller's URL is stored exactly as given.
        try:
            _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError("Image must be a valid URL") from None
        return v


class ProductCreate(BaseModel):
    """Schema for creating a new product."""
    title: str = Field(..., min_length=1, description="Product title")
    body_html: Optional[str] = Field(None, min_length=50, description="HTML description")
    vendor: str = Field(..., min_length=1, description="Vendor name")
    product_type: Optional[str] = None
    tags: Optional[List[str]] = None
    options: Optional[List[OptionIn]] = None
    images: Optional[List[ImageIn]] = None
    variants: List[VariantIn] = Field(..., min_length=1, description="At least one variant")
    published_at: Optional[datetime] = None

    @field_validator("body_html", "product_type", "tags", "options", "images", mode="before")
    @classmethod
    def not_null(cls, v):
        return _reject_null(v)

    @model_validator(mode="after")
    def distinct_variant_ids(self):
        _ensure_distinct_variant_ids(self.variants)
        return self


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional).

    Only the fields present in the payload end up in the patch; the store
    leaves every other field untouched.
    """
    title: Optional[str] = Field(None, min_length=1)
    body_html: Optional[str] = Field(None, min_length=50)
    vendor: Optional[str] = Field(None, min_length=1)
    product_type: Optional[str] = None
    tags: Optional[List[str]] = None
    options: Optional[List[OptionIn]] = None
    images: Optional[List[ImageIn]] = None
    variants: Optional[List[VariantIn]] = Field(None, min_length=1)
    published_at: Optional[datetime] = None

    @field_validator(
        "title", "body_html", "vendor", "product_type", "tags", "options", "images", "variants",
        mode="before",
    )
    @classmethod
    def not_null(cls, v):
        return _reject_null(v)

    @model_validator(mode="after")
    def distinct_variant_ids(self):
        _ensure_distinct_variant_ids(self.variants)
        return self

    def to_patch(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class SignupIn(BaseModel):
    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain-text password, hashed before storage")


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
