"""Input parsing for the code generators.

Turns command-line strings (field lists, names, method lists) into validated
records.

Usage::

    from struktos_codegen.parser import parse_fields

    fields = parse_fields("name:string,price:number,bio:string?")
"""

from struktos_codegen.parser.fields import (
    FieldParseError,
    InvalidNameError,
    ensure_id_field,
    find_id_field,
    format_fields,
    parse_fields,
    parse_methods,
    validate_entity_name,
    validate_service_name,
    validate_type,
)
from struktos_codegen.parser.models import FieldDefinition, SERVICE_METHODS, VALID_TYPES

__all__ = [
    "FieldDefinition",
    "FieldParseError",
    "InvalidNameError",
    "SERVICE_METHODS",
    "VALID_TYPES",
    "ensure_id_field",
    "find_id_field",
    "format_fields",
    "parse_fields",
    "parse_methods",
    "validate_entity_name",
    "validate_service_name",
    "validate_type",
]
