"""Field-grammar and name parsing for generator input.

The command line describes entity properties in a compact grammar::

    name:string,price:number,bio:string?

:func:`parse_fields` turns that string into :class:`FieldDefinition`
records.  Parsing is all-or-nothing: the first bad segment raises and no
partial list is ever returned.
"""

from __future__ import annotations

import re

from struktos_codegen.parser.models import (
    ID_FIELD,
    SERVICE_METHODS,
    TYPE_ALIASES,
    VALID_TYPES,
    FieldDefinition,
)


class FieldParseError(ValueError):
    """Raised when a field-definition string does not match the grammar."""


class InvalidNameError(ValueError):
    """Raised when an entity, action or service name is not a valid identifier."""


_ENTITY_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_SERVICE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")

_FORMAT_HINT = 'Expected format: "fieldName:type" or "fieldName:type?"'


# ---------------------------------------------------------------------------
# Field definitions
# ---------------------------------------------------------------------------


def validate_type(token: str) -> str:
    """Return the canonical type name for *token* or raise ``FieldParseError``.

    Type names are case-sensitive (``String`` is rejected); ``date`` is
    accepted as an alias of ``Date``.
    """
    canonical = TYPE_ALIASES.get(token, token)
    if canonical not in VALID_TYPES:
        raise FieldParseError(
            f'Invalid type "{token}". Valid types: {", ".join(VALID_TYPES)}'
        )
    return canonical


def parse_fields(text: str | None) -> list[FieldDefinition]:
    """Parse a comma-separated field list.

    Args:
        text: Grammar string such as ``"name:string,bio:string?"``.  ``None``,
            empty and whitespace-only input yield an empty list.

    Returns:
        Field definitions in input order.

    Raises:
        FieldParseError: On a segment without both sides of the ``:``, an
            invalid field name or an unknown type token.
    """
    if not text or not text.strip():
        return []

    fields: list[FieldDefinition] = []
    for segment in (part.strip() for part in text.split(",")):
        if not segment:
            continue

        name, sep, type_token = segment.partition(":")
        name = name.strip()
        type_token = type_token.strip()
        if not sep or not name or not type_token:
            raise FieldParseError(f'Invalid field format: "{segment}". {_FORMAT_HINT}')

        optional = type_token.endswith("?")
        if optional:
            type_token = type_token[:-1].rstrip()

        if not _ENTITY_NAME.match(name):
            raise FieldParseError(
                f'Invalid field name "{name}" in "{segment}". '
                "Field names must start with a letter and contain only letters and numbers"
            )

        try:
            field_type = validate_type(type_token)
        except FieldParseError as exc:
            raise FieldParseError(f'{exc} (field "{name}")') from None

        fields.append(FieldDefinition(name=name, type=field_type, optional=optional))

    return fields


def format_fields(fields: list[FieldDefinition]) -> str:
    """Inverse of :func:`parse_fields`."""
    return ",".join(field.to_token() for field in fields)


def ensure_id_field(fields: list[FieldDefinition]) -> list[FieldDefinition]:
    """Prepend a synthetic ``id:string`` unless a field named ``id`` exists."""
    if any(field.is_id for field in fields):
        return list(fields)
    return [ID_FIELD, *fields]


def find_id_field(fields: list[FieldDefinition]) -> FieldDefinition:
    """Return the identity field, falling back to ``id:string``."""
    for field in fields:
        if field.is_id:
            return field
    return ID_FIELD


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def validate_entity_name(name: str, kind: str = "Entity") -> None:
    """Strict name check: ``^[A-Za-z][A-Za-z0-9]*$``."""
    if not name or not name.strip():
        raise InvalidNameError(f"{kind} name is required")
    if not _ENTITY_NAME.match(name):
        raise InvalidNameError(
            f'Invalid {kind.lower()} name "{name}": must start with a letter and '
            "contain only letters and numbers"
        )


def validate_service_name(name: str, kind: str = "Service") -> None:
    """Lenient name check that additionally permits ``-`` and ``_``."""
    if not name or not name.strip():
        raise InvalidNameError(f"{kind} name is required")
    if not _SERVICE_NAME.match(name):
        raise InvalidNameError(
            f'Invalid {kind.lower()} name "{name}": must start with a letter and '
            "contain only letters, numbers, hyphens and underscores"
        )


# ---------------------------------------------------------------------------
# Service methods
# ---------------------------------------------------------------------------


def parse_methods(text: str | None) -> list[str]:
    """Parse ``"get,list"`` into a method list, defaulting to all CRUD methods.

    Duplicates are dropped; the order follows the input.
    """
    if not text or not text.strip():
        return list(SERVICE_METHODS)

    methods: list[str] = []
    for token in (part.strip().lower() for part in text.split(",")):
        if not token:
            continue
        if token not in SERVICE_METHODS:
            raise ValueError(
                f'Invalid method "{token}". Valid methods: {", ".join(SERVICE_METHODS)}'
            )
        if token not in methods:
            methods.append(token)
    return methods or list(SERVICE_METHODS)
