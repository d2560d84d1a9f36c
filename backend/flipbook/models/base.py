"""
Flipbook Backend — Stored Document Base
=========================================

What:  Shared base for the shapes written to MongoDB.
How:   Python attributes are snake_case; documents are stored with the
       camelCase keys the frontend (and existing data) uses, via an alias
       generator. `to_document()` produces the dict handed to Motor.

Client data never reaches the store unconverted: whole documents go through
model_validate, partial updates through `convert_fields()`. A value of the
wrong type is rejected before the write, so stored documents always read back.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from flipbook.exceptions import ValidationError


def utcnow() -> datetime:
    """Timezone-aware current time; every stored timestamp goes through here."""
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """Base class for every stored document shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Dump to a MongoDB-ready dict keyed by the stored (camelCase) names."""
        return self.model_dump(by_alias=True)

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """Default values for every optional field, keyed by stored name."""
        return {
            field.alias or name: field.get_default(call_default_factory=True)
            for name, field in cls.model_fields.items()
            if not field.is_required()
        }

    @classmethod
    def convert_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert the values of declared fields (keyed by stored name) to their
        declared types, e.g. "3" → 3 for an int field. Undeclared keys pass
        through untouched.

        Raises:
            ValidationError: a declared field holds a value that cannot be
                converted (→ 400). Names the offending field.
        """
        fields = {field.alias or name: field for name, field in cls.model_fields.items()}
        converted = {}
        for key, value in data.items():
            field = fields.get(key)
            if field is None:
                converted[key] = value
                continue
            try:
                converted[key] = TypeAdapter(field.annotation).validate_python(value)
            except PydanticValidationError as e:
                raise ValidationError(
                    message=f"Invalid value for {key}",
                    field=key,
                    context={"reason": e.errors()[0]["msg"]},
                )
        return converted


def validation_reason(exc: PydanticValidationError) -> Dict[str, Any]:
    """First error of a failed model_validate as (field, reason) context."""
    error = exc.errors()[0]
    return {
        "field": ".".join(str(part) for part in error["loc"]),
        "reason": error["msg"],
    }
