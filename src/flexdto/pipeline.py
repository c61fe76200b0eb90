"""Value pipeline: transform, validate or pass through a raw field value."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .fields import MISSING, TransformFn, TypeTag, type_tag
from .logging import DiagnosticLogger


def is_compatible(expected: TypeTag, value: Any) -> bool:
    """Whether ``value`` fits a field whose current value has type ``expected``.

    Object-typed fields (nested DTOs, lists, dicts, ``None`` defaults) accept
    any object-shaped or absent value; no structural check is made.
    """
    actual = type_tag(value)
    if actual is expected:
        return True
    return expected is TypeTag.OBJECT and (
        actual in (TypeTag.OBJECT, TypeTag.UNDEFINED) or value is None
    )


class ValuePipeline:
    """Decides the final value of each resolved field of one ``init`` call.

    Transforms win over validation; validation only ever reports, it never
    changes what gets assigned.
    """

    def __init__(
        self,
        owner: str,
        transforms: Mapping[str, TransformFn],
        strict_mode: bool,
        diagnostics: Optional[DiagnosticLogger] = None,
    ):
        self.owner = owner
        self.transforms = transforms
        self.strict_mode = strict_mode
        self.diagnostics = diagnostics or DiagnosticLogger()

    def convert(self, field_name: str, value: Any, current: Any = MISSING) -> Any:
        """Return the value to store for ``field_name``.

        Args:
            field_name: Resolved target field
            value: Raw value from the payload
            current: The field's value before assignment, ``MISSING`` if unset

        Returns:
            The transformed value, or ``value`` itself
        """
        transform = self.transforms.get(field_name)
        if transform is not None:
            return self._apply_transform(field_name, transform, value)

        expected = type_tag(current) if current is not MISSING else None
        if expected is not None and self.strict_mode:
            self.validate(field_name, value, expected)
        return value

    def _apply_transform(self, field_name: str, transform: TransformFn, value: Any) -> Any:
        try:
            return transform(value)
        except Exception as e:
            if self.strict_mode:
                self.diagnostics.transform_failure(self.owner, field_name, e)
            return value

    def validate(self, field_name: str, value: Any, expected: TypeTag) -> bool:
        """Report a type mismatch; never raises and never blocks assignment."""
        if is_compatible(expected, value):
            return True
        self.diagnostics.type_mismatch(
            self.owner, field_name, expected.value, type_tag(value).value, value
        )
        return False
