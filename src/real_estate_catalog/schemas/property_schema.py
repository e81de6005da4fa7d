from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class PropertyType(str, Enum):
    APARTMENT = "Apartment"
    HOUSE = "House"
    VILLA = "Villa"
    LAND = "Land"
    COMMERCIAL = "Commercial"


class ListingStatus(str, Enum):
    FOR_SALE = "For Sale"
    FOR_RENT = "For Rent"
    SOLD = "Sold"
    RENTED = "Rented"


# The wire format uses camelCase (imageUrl, createdAt) while the Python side keeps snake_case
camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class PropertyBase(BaseModel):
    model_config = camel_config

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)
    location: str = Field(..., min_length=1)
    type: PropertyType
    status: ListingStatus
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    area: float = Field(..., ge=0, allow_inf_nan=False, description="Area in square feet.")
    image_url: Optional[str] = None


class PropertyCreateSchema(PropertyBase):
    """
    Body of a new listing. The id and the creation date are assigned by the server.
    """


class PropertyUpdateSchema(BaseModel):
    """
    Partial update: only the fields sent by the client are replaced.
    Unknown keys (id, createdAt included) are ignored.
    """
    model_config = camel_config

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, allow_inf_nan=False)
    location: Optional[str] = Field(None, min_length=1)
    type: Optional[PropertyType] = None
    status: Optional[ListingStatus] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        # A required field may be omitted, but it can't be explicitly cleared
        nulled = [
            name for name in self.model_fields_set
            if name != "image_url" and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Required fields cannot be null: {', '.join(sorted(nulled))}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PropertySchema(PropertyBase):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, use_enum_values=True, from_attributes=True
    )

    id: str
    created_at: datetime


class MessageSchema(BaseModel):
    message: str
