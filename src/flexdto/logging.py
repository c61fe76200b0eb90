"""
Structured logging for flexdto.

Mapping diagnostics (type mismatches, failed transforms) are emitted as
structlog warning events. They are purely observational: nothing logged here
ever changes the values assigned to a DTO.
"""

import json
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger

from .config import get_settings


class DiagnosticKind(str, Enum):
    """Kinds of mapping diagnostics."""

    TYPE_MISMATCH = "type_mismatch"
    TRANSFORM_FAILURE = "transform_failure"


@dataclass
class DiagnosticEvent:
    """One mapping diagnostic, about a single field of a single DTO."""

    kind: DiagnosticKind
    dto: str
    field: str
    expected_type: Optional[str] = None
    actual_type: Optional[str] = None
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def event(self) -> str:
        if self.kind is DiagnosticKind.TYPE_MISMATCH:
            return "Type mismatch"
        return "Transform failed"

    @property
    def hint(self) -> str:
        if self.kind is DiagnosticKind.TYPE_MISMATCH:
            return (
                "Register a transform (field(transform=...), @transform or "
                "transforms=...) to convert the value; pass strict_mode=False "
                "to silence this warning."
            )
        return "Using original value."

    def describe(self) -> str:
        """Human-readable one-line summary."""
        if self.kind is DiagnosticKind.TYPE_MISMATCH:
            return (
                f"{self.event} in {self.dto}.{self.field}: expected "
                f"{self.expected_type}, but got {self.actual_type} (value: {self.value})"
            )
        return f"{self.event} in {self.dto}.{self.field}: {self.error}"


def render_value(value: Any) -> str:
    """Render a raw value the way it would appear in a JSON payload."""
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(value)


class ValueTruncationProcessor:
    """
    Structlog processor that shortens long rendered values.

    Raw payload values end up in mismatch diagnostics; this keeps a single
    oversized value from flooding the log.
    """

    TRUNCATED_FIELDS = ("value", "error")

    def __init__(self, max_length: int = 200):
        self.max_length = max_length

    def __call__(
        self, logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        for key in self.TRUNCATED_FIELDS:
            value = event_dict.get(key)
            if isinstance(value, str) and len(value) > self.max_length:
                event_dict[key] = value[: self.max_length] + "...(truncated)"
        return event_dict


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_value_length: Optional[int] = None,
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, console)
        log_file: Optional log file path
        max_value_length: Maximum length of raw values rendered in diagnostics

    Unset arguments fall back to ``MapperSettings``.
    """
    settings = get_settings()
    log_level = (log_level or settings.log_level).upper()
    log_format = log_format or settings.log_format
    max_value_length = max_value_length or settings.max_value_length

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        ValueTruncationProcessor(max_value_length),
    ]

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.extend([structlog.dev.ConsoleRenderer(colors=False)])

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(getattr(logging, log_level))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


class DiagnosticLogger:
    """Helper class for emitting mapping diagnostics."""

    def __init__(self, logger: Optional[FilteringBoundLogger] = None):
        self.logger = logger or get_logger("flexdto")

    def log_event(self, diagnostic: DiagnosticEvent) -> None:
        """Log a diagnostic as a warning with its fields as structured data."""
        fields = {
            "kind": diagnostic.kind.value,
            "dto": diagnostic.dto,
            "field": diagnostic.field,
            "expected_type": diagnostic.expected_type,
            "actual_type": diagnostic.actual_type,
            "value": diagnostic.value,
            "error": diagnostic.error,
            "hint": diagnostic.hint,
        }
        fields = {k: v for k, v in fields.items() if v is not None}
        self.logger.warning(diagnostic.event, **fields)

    def type_mismatch(
        self, dto: str, field: str, expected_type: str, actual_type: str, value: Any
    ) -> None:
        self.log_event(
            DiagnosticEvent(
                kind=DiagnosticKind.TYPE_MISMATCH,
                dto=dto,
                field=field,
                expected_type=expected_type,
                actual_type=actual_type,
                value=render_value(value),
            )
        )

    def transform_failure(self, dto: str, field: str, error: BaseException) -> None:
        self.log_event(
            DiagnosticEvent(
                kind=DiagnosticKind.TRANSFORM_FAILURE,
                dto=dto,
                field=field,
                error=str(error) or error.__class__.__name__,
            )
        )
