"""Projection of populated DTO graphs back to plain, JSON-safe dicts."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from .casing import to_snake
from .fields import MISSING, is_mapped


class PlainProjector:
    """Rebuilds plain dicts from DTO instances.

    Nested DTOs (directly or as list elements) are projected recursively;
    every other value, including plain dicts, is passed through by reference.
    """

    def __init__(self, use_snake_case: bool = False):
        self.use_snake_case = use_snake_case

    def output_key(self, name: str) -> str:
        return to_snake(name) if self.use_snake_case else name

    def project_fields(self, items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
        """Project ``(field name, value)`` pairs of one instance."""
        result: Dict[str, Any] = {}
        for name, value in items:
            if name.startswith("_") or value is MISSING:
                continue
            if callable(value) and not is_mapped(value):
                continue
            result[self.output_key(name)] = self.project_value(value)
        return result

    def project_value(self, value: Any) -> Any:
        if is_mapped(value):
            return value.to_plain(self.use_snake_case)
        if isinstance(value, (list, tuple)):
            return [
                item.to_plain(self.use_snake_case) if is_mapped(item) else item
                for item in value
            ]
        return value


def json_default(value: Any) -> Any:
    """``default=`` hook for ``json.dumps`` that understands DTOs.

    Example::

        json.dumps(order, default=json_default)
    """
    if is_mapped(value):
        return value.to_json()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


__all__ = ["PlainProjector", "json_default"]
