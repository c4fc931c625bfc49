"""
PostBoard Backend: User Schemas
===============================

Three shapes per resource:
    UserCreate: every attribute required and non-empty (typed parse of POST body)
    UserUpdate: every attribute optional (PUT body, merged onto the record)
    User:       the stored record, identifier included
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from postboard.schemas.common import required_value


class UserCreate(BaseModel):
    """POST /users body. Non-zero numbers and true are stored as their JSON text."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    name: str = Field(min_length=1, description="Display name")
    email: str = Field(min_length=1, description="Contact email (not format-checked)")
    phone: str = Field(min_length=1, description="Contact phone number")

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def require_present(cls, v):
        return required_value(v)


class UserUpdate(BaseModel):
    """PUT /users/{id} body. Absent, null or empty fields keep the stored value."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Union[int, str] = Field(description="Random integer (memory) or hex UUID (database)")
    name: str
    email: str
    phone: str
