"""
flexdto: flexible DTO mapping for loosely typed payloads.

Populates declared DTO classes from API payloads regardless of key style
(snake_case, camelCase or custom aliases), converts values with per-field
transforms, builds nested DTOs, and projects them back to plain dicts.
"""

__version__ = "0.1.0"

from .casing import to_camel, to_snake
from .config import MapperSettings, get_settings, is_development_mode, set_strict_default
from .dto import FlexDto
from .exceptions import FieldDefinitionError, FlexDtoError, OptionsError, RegistrationError
from .fields import MISSING, TypeTag, field, type_tag
from .logging import DiagnosticEvent, DiagnosticKind, get_logger, setup_logging
from .options import MappingOptions, Transforms
from .projection import json_default
from .registry import alias, get_aliases, get_transforms, transform

__all__ = [
    "FlexDto",
    "MappingOptions",
    "Transforms",
    "field",
    "alias",
    "transform",
    "get_aliases",
    "get_transforms",
    "to_camel",
    "to_snake",
    "json_default",
    "MISSING",
    "TypeTag",
    "type_tag",
    # Configuration
    "MapperSettings",
    "get_settings",
    "is_development_mode",
    "set_strict_default",
    # Logging
    "DiagnosticEvent",
    "DiagnosticKind",
    "get_logger",
    "setup_logging",
    # Errors
    "FlexDtoError",
    "FieldDefinitionError",
    "OptionsError",
    "RegistrationError",
]
