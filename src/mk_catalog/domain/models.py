"""Domain models for mk_catalog — pure dataclasses, no business logic."""

from dataclasses import dataclass


@dataclass
class Product:
    id: str
    title: str
    price: float
    description: str
    category: str
    condition: str
    image: str                  # primary thumbnail, images[0] at creation
    images: list[str]
    seller_id: str
    seller_name: str            # snapshot of the seller's name at creation
    created_at: int             # epoch ms
    location: str               # "Area, City, Region"
    status: str = "active"

    @property
    def is_sold(self) -> bool:
        return self.status == "sold"
