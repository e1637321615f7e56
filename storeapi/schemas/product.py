"""Product Schemas — Pydantic model with field-level validation for product payloads.

Invariants:
    - title, price, brand, category, thumbnail are required
    - price >= 0, discountPercentage in [0, 50], rating in [0, 5]
    - Numbers are finite (NaN and Infinity rejected)
    - Wire names are camelCase (discountPercentage); snake_case accepted on input
    - Unknown fields (including _id, createdAt, updatedAt) are ignored

Design Decisions:
    - One model for create and replace; merge validates the merged record with the same model
      so a PATCH can never leave a product missing a required field
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storeapi.core.record_schema import ModelSchema


class ProductFields(BaseModel):
    """Full product payload (everything except identity and timestamps)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: float = Field(ge=0)
    discount_percentage: float | None = Field(
        None, alias="discountPercentage", ge=0, le=50,
    )
    rating: float | None = Field(None, ge=0, le=5)
    brand: str = Field(min_length=1)
    category: str = Field(min_length=1)
    thumbnail: str = Field(min_length=1)
    images: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


product_schema = ModelSchema(ProductFields, "product")
