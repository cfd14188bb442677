"""
Pydantic schemas for property records and property search options.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from decimal import Decimal


class PropertyCreate(BaseModel):
    """Fields required to insert a new property listing."""

    owner_id: int = Field(..., gt=0, description="ID of the owning user")

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Speed lamp"]
    )

    description: Optional[str] = Field(None, description="Detailed property description")

    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)

    cost_per_night: int = Field(
        ...,
        ge=0,
        description="Nightly price in cents",
        examples=[93061]
    )

    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)

    country: str = Field(..., max_length=255)
    street: str = Field(..., max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., max_length=255)
    post_code: str = Field(..., max_length=255)

    @field_validator("post_code", mode="before")
    @classmethod
    def coerce_post_code(cls, v):
        """Accept numeric post codes."""
        if isinstance(v, int):
            return str(v)
        return v

    model_config = {"extra": "ignore"}


class PropertySearchOptions(BaseModel):
    """
    Optional property search predicates.
    Prices are in whole currency units; blank values count as absent.
    """

    owner_id: Optional[int] = Field(None, description="Only properties owned by this user")
    city: Optional[str] = Field(None, description="Substring of the property city")

    minimum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Minimum nightly price in whole currency units"
    )

    maximum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Maximum nightly price in whole currency units"
    )

    minimum_rating: Optional[Decimal] = Field(
        None,
        ge=0,
        le=5,
        description="Minimum average review rating"
    )

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """HTML forms submit empty strings for unused filters."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_price_range(self):
        """Validate that the minimum price does not exceed the maximum price."""
        if (
            self.minimum_price_per_night is not None
            and self.maximum_price_per_night is not None
            and self.minimum_price_per_night > self.maximum_price_per_night
        ):
            raise ValueError("minimum_price_per_night cannot exceed maximum_price_per_night")
        return self

    model_config = {"extra": "ignore"}
