"""Pydantic schemas for mk_catalog requests and responses."""

from pydantic import BaseModel, Field, field_validator

from src.mk_catalog.domain.models import Product
from src.mk_common.enums import Category, Condition


class ListingRequest(BaseModel):
    """Body of create and update. Update is a full replace of these fields."""

    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    category: Category
    condition: Condition
    location: str = Field(..., min_length=1, max_length=200)
    images: list[str] = Field(..., min_length=1)
    description: str = ""
    features: str = ""   # free-text notes; used when description is empty

    @field_validator("images")
    @classmethod
    def images_not_blank(cls, v: list[str]) -> list[str]:
        if any(not ref.strip() for ref in v):
            raise ValueError("Image references must not be blank")
        return v


class DescribeRequest(BaseModel):
    title: str = Field(..., min_length=1)
    category: Category
    features: str = Field(..., min_length=1)


class DescribeResponse(BaseModel):
    description: str


class ProductOut(BaseModel):
    id: str
    title: str
    price: float
    description: str
    category: str
    condition: str
    image: str
    images: list[str]
    seller_id: str
    seller_name: str
    created_at: int
    location: str
    status: str

    @classmethod
    def from_domain(cls, p: Product) -> "ProductOut":
        return cls(
            id=p.id,
            title=p.title,
            price=p.price,
            description=p.description,
            category=p.category,
            condition=p.condition,
            image=p.image,
            images=list(p.images),
            seller_id=p.seller_id,
            seller_name=p.seller_name,
            created_at=p.created_at,
            location=p.location,
            status=p.status,
        )


class ProductListResponse(BaseModel):
    items: list[ProductOut]
    total: int

    @classmethod
    def from_domain(cls, products: list[Product]) -> "ProductListResponse":
        return cls(items=[ProductOut.from_domain(p) for p in products], total=len(products))
