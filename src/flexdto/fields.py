"""Field descriptors and runtime type tags.

Every ``FlexDto`` subclass gets an ordered ``__flex_fields__`` mapping of
``FieldSpec`` objects, built once when the class is defined from its
annotations and public class attributes.
"""

from __future__ import annotations

import copy
import inspect
import numbers
import typing
from dataclasses import dataclass, field as dataclass_field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .casing import to_camel
from .exceptions import FieldDefinitionError

TransformFn = Callable[[Any], Any]


class _MissingType:
    """Marker for "no value", the counterpart of an undefined property."""

    _instance: Optional["_MissingType"] = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_MissingType":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_MissingType":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


class TypeTag(str, Enum):
    """Coarse runtime type of a value, modelled on JavaScript ``typeof``."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    OBJECT = "object"
    UNDEFINED = "undefined"


def type_tag(value: Any) -> TypeTag:
    """Classify a value into a ``TypeTag``.

    ``None`` is an object, ``bool`` is checked before numbers because it is
    an ``int`` subclass.
    """
    if value is MISSING:
        return TypeTag.UNDEFINED
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, numbers.Number):
        return TypeTag.NUMBER
    if value is not None and not is_mapped(value) and callable(value):
        return TypeTag.FUNCTION
    return TypeTag.OBJECT


def is_mapped(value: Any) -> bool:
    """Return True for instances of ``FlexDto`` (or any subclass)."""
    return not isinstance(value, type) and isinstance(
        getattr(type(value), "__flex_fields__", None), dict
    )


@dataclass
class FieldInfo:
    """Placeholder returned by ``field()`` until the class is processed."""

    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None
    aliases: Tuple[str, ...] = ()
    transform: Optional[TransformFn] = None


def field(
    default: Any = MISSING,
    *,
    default_factory: Optional[Callable[[], Any]] = None,
    aliases: Sequence[str] = (),
    transform: Optional[TransformFn] = None,
) -> Any:
    """Declare a DTO field with mapping metadata.

    Example::

        class Order(FlexDto):
            orderId: str = field("", aliases=["order_id", "id"])
            totalAmount: float = field(0, transform=float)
            products: list = field(default_factory=list)
    """
    if default is not MISSING and default_factory is not None:
        raise FieldDefinitionError("cannot specify both default and default_factory")
    if isinstance(aliases, str):
        aliases = (aliases,)
    return FieldInfo(
        default=default,
        default_factory=default_factory,
        aliases=tuple(aliases),
        transform=transform,
    )


@dataclass
class FieldSpec:
    """Explicit description of one declared field."""

    name: str
    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None
    aliases: Tuple[str, ...] = ()
    transform: Optional[TransformFn] = None
    owner: str = ""
    annotation: Any = dataclass_field(default=None, repr=False)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def make_default(self) -> Any:
        """Build a fresh default so instances never share mutable state."""
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)


def _own_annotations(cls: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except NameError:
        # Unquoted forward references on interpreters with lazy annotations.
        import annotationlib

        return dict(
            annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF)
        )


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _is_data_attribute(value: Any) -> bool:
    if isinstance(value, FieldInfo):
        return True
    if isinstance(value, (property, classmethod, staticmethod)):
        return False
    if inspect.isdatadescriptor(value) or inspect.ismethoddescriptor(value):
        return False
    return not callable(value)


def collect_fields(cls: type, inherited: Dict[str, FieldSpec]) -> Dict[str, FieldSpec]:
    """Collect the ordered field specs of ``cls``.

    Inherited fields come first; the class's own annotations follow in
    declaration order, then unannotated public data attributes. ``FieldInfo``
    placeholders are replaced on the class by their plain default (or removed).
    """
    fields: Dict[str, FieldSpec] = dict(inherited)
    annotations = _own_annotations(cls)
    namespace = dict(vars(cls))

    names: List[str] = [
        name
        for name, annotation in annotations.items()
        if not name.startswith("_") and not _is_class_var(annotation)
    ]
    names.extend(
        name
        for name, value in namespace.items()
        if not name.startswith("_") and name not in annotations and _is_data_attribute(value)
    )

    for name in names:
        value = namespace.get(name, MISSING)
        if value is not MISSING and not _is_data_attribute(value):
            continue

        if isinstance(value, FieldInfo):
            spec = FieldSpec(
                name=name,
                default=value.default,
                default_factory=value.default_factory,
                aliases=value.aliases,
                transform=value.transform,
            )
            if value.default is MISSING:
                delattr(cls, name)
            else:
                setattr(cls, name, value.default)
        elif value is MISSING and name in inherited:
            # Re-annotation without a value keeps the inherited default.
            spec = replace(inherited[name])
        else:
            spec = FieldSpec(name=name, default=value)

        spec.owner = cls.__name__
        spec.annotation = annotations.get(name)
        fields[name] = spec

    _check_collisions(cls, fields)
    return fields


def _check_collisions(cls: type, fields: Dict[str, FieldSpec]) -> None:
    seen: Dict[str, str] = {}
    for name in fields:
        key = to_camel(name)
        if key in seen:
            raise FieldDefinitionError(
                f"Fields '{seen[key]}' and '{name}' of {cls.__name__} collide as '{key}'",
                dto_name=cls.__name__,
                field_names=[seen[key], name],
            )
        seen[key] = name


__all__ = [
    "MISSING",
    "FieldInfo",
    "FieldSpec",
    "TransformFn",
    "TypeTag",
    "collect_fields",
    "field",
    "is_mapped",
    "type_tag",
]
