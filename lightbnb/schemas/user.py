"""
Pydantic schemas for user records.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email


class UserCreate(BaseModel):
    """
    Fields required to insert a new user.
    Values are stored exactly as supplied, so lookups by the same email match.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )

    email: str = Field(
        ...,
        max_length=255,
        description="User email address",
        examples=["sebastianguerra@ymail.com"]
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Password hash, stored as supplied"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Reject blank names."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        """Check the address format but keep the caller's spelling."""
        validate_email(v)
        return v

    model_config = {"extra": "ignore"}
