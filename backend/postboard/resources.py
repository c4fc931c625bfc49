"""
PostBoard Backend: Resource Definitions
=======================================

What:  One ResourceKind per CRUD-able entity (User, Post).
Why:   Stores and handlers are generic; everything resource-specific (schemas,
       response key, messages) lives here.
How:   parse_create / parse_update turn an untyped JSON body into validated
       attribute dicts; build_record produces the typed record.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Type, Union

import pydantic
from pydantic import BaseModel

from postboard.exceptions import ValidationError
from postboard.schemas import Post, PostCreate, PostUpdate, User, UserCreate, UserUpdate

RecordId = Union[int, str]

REQUIRED_FIELDS_MESSAGE = "All fields are required"


@dataclass(frozen=True)
class ResourceKind:
    """Describes one resource: its schemas and the words used in responses."""

    name: str
    label: str
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    record_schema: Type[BaseModel]

    @property
    def fields(self) -> List[str]:
        return list(self.create_schema.model_fields)

    def parse_create(self, attrs: Any) -> Dict[str, str]:
        """
        Validate a create body: every attribute present and non-empty.

        Raises:
            ValidationError: listing the offending fields under context["fields"]
        """
        if not isinstance(attrs, dict):
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                context={"fields": self.fields},
            )
        try:
            parsed = self.create_schema.model_validate(attrs)
        except pydantic.ValidationError as e:
            bad = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                context={"fields": bad},
            ) from e
        return parsed.model_dump()

    def parse_update(self, attrs: Any) -> Dict[str, str]:
        """
        Keep only the supplied, non-empty attributes of an update body.

        An empty string or null keeps the stored value, so it is dropped here.
        """
        if not isinstance(attrs, dict):
            return {}
        try:
            parsed = self.update_schema.model_validate(attrs)
        except pydantic.ValidationError as e:
            raise ValidationError(
                message=f"Invalid {self.name} attributes",
                context={"errors": e.errors(include_url=False)},
            ) from e
        return {key: value for key, value in parsed.model_dump().items() if value}

    def build_record(self, record_id: RecordId, fields: Dict[str, Any]) -> BaseModel:
        return self.record_schema(id=record_id, **fields)

    def not_found_message(self) -> str:
        return f"{self.label} not found"

    def done_message(self, action: str) -> str:
        return f"{self.label} {action} successfully"


USERS = ResourceKind(
    name="user",
    label="User",
    create_schema=UserCreate,
    update_schema=UserUpdate,
    record_schema=User,
)

POSTS = ResourceKind(
    name="post",
    label="Post",
    create_schema=PostCreate,
    update_schema=PostUpdate,
    record_schema=Post,
)
