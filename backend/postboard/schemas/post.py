"""PostBoard Backend: Post Schemas (same create/update/record split as users)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from postboard.schemas.common import required_value


class PostCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)

    @field_validator("title", "description", mode="before")
    @classmethod
    def require_present(cls, v):
        return required_value(v)


class PostUpdate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None


class Post(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Union[int, str]
    title: str
    description: str
