"""Listing models for sellers"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class NewListingRequest(BaseModel):
    """Form data for listing a new product"""
    product_name: str = Field(min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=5000)
    category: Optional[str] = None
    price: float = Field(gt=0)
    tags: Optional[str] = Field(
        default=None,
        description="Comma-separated tags, e.g., vintage, electronics, handmade",
    )
    image_urls: list[str] = []
    primary_image_index: Optional[int] = None

    @field_validator("product_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    def tag_list(self) -> list[str]:
        """Split the comma-separated tags, dropping empty entries"""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]
