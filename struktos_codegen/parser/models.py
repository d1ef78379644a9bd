"""Pydantic v2 models for parsed generator input."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------

FieldType = Literal["string", "number", "boolean", "Date", "any", "unknown"]

VALID_TYPES: tuple[str, ...] = ("string", "number", "boolean", "Date", "any", "unknown")

# Lower-case spellings accepted on the command line for the TypeScript name.
TYPE_ALIASES: dict[str, str] = {
    "date": "Date",
}

NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9]*$"


# ---------------------------------------------------------------------------
# Field definition
# ---------------------------------------------------------------------------

class FieldDefinition(BaseModel):
    """One typed property of a generated entity, e.g. ``bio:string?``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=NAME_PATTERN, description="Property identifier")
    type: FieldType = Field(default="string", description="TypeScript type name")
    optional: bool = Field(default=False, description="Whether the property may be omitted")

    def to_token(self) -> str:
        """Reconstitute the ``name:type[?]`` grammar segment."""
        return f"{self.name}:{self.type}{'?' if self.optional else ''}"

    @property
    def is_id(self) -> bool:
        return self.name.lower() == "id"


ID_FIELD = FieldDefinition(name="id", type="string", optional=False)


# ---------------------------------------------------------------------------
# Service methods
# ---------------------------------------------------------------------------

ServiceMethod = Literal["get", "list", "create", "update", "delete"]

SERVICE_METHODS: tuple[str, ...] = ("get", "list", "create", "update", "delete")
