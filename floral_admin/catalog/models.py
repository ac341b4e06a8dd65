"""Catalog entities exchanged with the storefront's catalog callbacks."""

from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    flowers = "flowers"
    plants = "plants"
    orchids = "orchids"
    gifts = "gifts"
    preserved = "preserved"


# Storefront display labels (Spanish).
CATEGORY_LABELS: dict[Category, str] = {
    Category.flowers: "Ramos",
    Category.plants: "Plantas",
    Category.orchids: "Orquídeas",
    Category.gifts: "Regalos",
    Category.preserved: "Eternas",
}


class Product(BaseModel):
    """A published catalog entry. image is an encoded image data URI."""

    id: str
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    category: Category = Category.flowers
    image: str = Field(min_length=1)

    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS[self.category]


class ProductDraft(BaseModel):
    """Unsaved product fields. Used both for the new-product form and for pending edits."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: Category | None = None
    image: str | None = None

    @classmethod
    def blank(cls) -> "ProductDraft":
        """Fresh new-product form."""
        return cls(name="", description="", price=0, category=Category.flowers, image="")

    def missing_fields(self) -> list[str]:
        """Fields that must be filled before the draft can be published."""
        missing = []
        if not self.name:
            missing.append("name")
        if not self.price or self.price <= 0:
            missing.append("price")
        if not self.image:
            missing.append("image")
        return missing


class Offer(BaseModel):
    """A promotional offer shown on the storefront."""

    id: str
    title: str = Field(min_length=1)
    description: str = ""
    image: str = ""
