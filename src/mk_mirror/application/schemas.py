"""Wire models for the mirror API — camelCase, same shape as the local store."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MirrorProductIn(BaseModel):
    """Creation payload; id, createdAt and status are assigned server-side.

    A lone `image` is promoted to `images`; a payload with neither is rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    description: str = ""
    category: str
    condition: str
    image: str = ""
    images: list[str] = Field(default_factory=list)
    seller_id: str = Field(..., alias="sellerId")
    seller_name: str = Field("", alias="sellerName")
    location: str = ""

    @model_validator(mode="after")
    def require_an_image(self) -> "MirrorProductIn":
        self.images = [i for i in self.images if i.strip()]
        if not self.images and self.image.strip():
            self.images = [self.image]
        if not self.images:
            raise ValueError("at least one image is required")
        return self
