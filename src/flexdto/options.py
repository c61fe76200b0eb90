"""Per-call mapping options."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import OptionsError

Transforms = Mapping[str, Callable[[Any], Any]]


class MappingOptions(BaseModel):
    """Options accepted by ``FlexDto.init``.

    ``strict_mode`` is tri-state: ``True`` / ``False`` force diagnostics on
    or off, ``None`` uses the value detected when the instance was built.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        frozen=True,
    )

    aliases: Dict[str, List[str]] = Field(
        default_factory=dict, description="Alternative input keys per field"
    )
    transforms: Dict[str, Callable[[Any], Any]] = Field(
        default_factory=dict, description="Value transform per field"
    )
    strict_mode: Optional[bool] = Field(
        default=None, alias="strictMode", description="Report type mismatches and failed transforms"
    )

    @classmethod
    def coerce(
        cls,
        options: Union["MappingOptions", Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> "MappingOptions":
        """Build options from an instance, a mapping and/or keyword overrides."""
        if isinstance(options, MappingOptions):
            data: Dict[str, Any] = {
                name: getattr(options, name) for name in options.model_fields_set
            }
        else:
            data = dict(options or {})
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if "strict_mode" in overrides:
            data.pop("strictMode", None)
        data.update(overrides)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            field_errors = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in e.errors()
            }
            raise OptionsError(field_errors=field_errors) from e


__all__ = ["MappingOptions", "Transforms"]
