"""
FlexDto base class.

Example::

    class Center(FlexDto):
        centerId: str = ""
        centerName: str = ""

    class User(FlexDto):
        userId: str = ""
        age: int = field(0, transform=int)
        center: Optional[Center] = field(
            None, transform=lambda v: Center(v) if v else None
        )

    user = User({"user_id": "U001", "age": "30", "center": {"center_id": "C001"}})
    user.age                  # 30
    user.center.centerId      # 'C001'
    user.to_plain(True)       # {'user_id': 'U001', 'age': 30, 'center': {...}}
"""

from __future__ import annotations

import inspect
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .config import is_development_mode
from .fields import MISSING, FieldSpec, collect_fields, is_mapped
from .options import MappingOptions
from .pipeline import ValuePipeline
from .projection import PlainProjector
from .registry import registry
from .resolver import FieldResolver


class FlexDto:
    """Base class for DTOs populated from loosely typed payloads.

    Subclasses declare fields as annotated class attributes (with or without
    a default) and either pass the payload to ``FlexDto.__init__`` or call
    ``self.init(data, ...)`` from their own ``__init__``.
    """

    __flex_fields__: ClassVar[Dict[str, FieldSpec]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        inherited = dict(cls.__flex_fields__)
        fields = collect_fields(cls, inherited)
        cls.__flex_fields__ = fields
        registry.register_fields(
            cls, {name: spec for name, spec in fields.items() if inherited.get(name) is not spec}
        )

    def __init__(
        self,
        data: Any = None,
        options: Union[MappingOptions, Mapping[str, Any], None] = None,
        **overrides: Any,
    ):
        self._strict_mode = is_development_mode()
        self._options = MappingOptions()
        for spec in type(self).__flex_fields__.values():
            if spec.has_default:
                setattr(self, spec.name, spec.make_default())
        if data is not None:
            self.init(data, options, **overrides)

    def __getattr__(self, name: str) -> Any:
        # Declared fields that never received a value read as None.
        if not name.startswith("_") and name in type(self).__flex_fields__:
            return None
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    @property
    def strict_mode(self) -> bool:
        """Whether diagnostics are currently enabled for this instance."""
        if self._options.strict_mode is not None:
            return self._options.strict_mode
        return self._strict_mode

    def init(
        self,
        data: Any,
        options: Union[MappingOptions, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> None:
        """
        Populate fields from ``data``.

        Args:
            data: Mapping, another DTO, or an object with attributes. Anything
                else is ignored.
            options: ``MappingOptions`` or a mapping with ``aliases``,
                ``transforms`` and ``strict_mode`` (or ``strictMode``)
            **overrides: Same keys as ``options``, taking precedence

        Never raises because of payload content: unknown keys are dropped,
        mismatching values are assigned as-is and reported when diagnostics
        are enabled.
        """
        items = self._payload_items(data)
        if items is None:
            return

        self._options = MappingOptions.coerce(options, **overrides)

        cls = type(self)
        static_aliases, static_transforms = registry.tables_for(cls)
        aliases = {**static_aliases, **self._options.aliases}
        transforms = {**static_transforms, **self._options.transforms}

        resolver = FieldResolver(self._field_names(), aliases, self._is_assignable)
        pipeline = ValuePipeline(cls.__name__, transforms, self.strict_mode)

        for key, value in items:
            if value is MISSING:
                continue
            target = resolver.resolve(key)
            if target is None:
                continue
            current = self.__dict__.get(target, MISSING)
            setattr(self, target, pipeline.convert(target, value, current))

    def to_plain(self, use_snake_case: bool = False) -> Dict[str, Any]:
        """
        Convert to a plain dict.

        Args:
            use_snake_case: Output keys in snake_case instead of camelCase
        """
        projector = PlainProjector(use_snake_case)
        return projector.project_fields(self._field_items())

    def to_json(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dict (camelCase keys)."""
        return self.to_plain(False)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}" for name, value in self._field_items() if value is not MISSING
        )
        return f"{type(self).__name__}({fields})"

    def _field_names(self) -> List[str]:
        """Declared fields followed by public data attributes set on the instance."""
        names = list(type(self).__flex_fields__)
        for name, value in vars(self).items():
            if name.startswith("_") or name in names:
                continue
            if callable(value) and not is_mapped(value):
                continue
            names.append(name)
        return names

    def _field_items(self) -> Iterator[Tuple[str, Any]]:
        for name in self._field_names():
            yield name, self.__dict__.get(name, MISSING)

    def _is_assignable(self, name: str) -> bool:
        attr = inspect.getattr_static(self, name, MISSING)
        if attr is MISSING:
            return True
        if isinstance(attr, (property, classmethod, staticmethod)):
            return False
        if inspect.isdatadescriptor(attr):
            return False
        return is_mapped(attr) or not callable(attr)

    @staticmethod
    def _payload_items(data: Any) -> Optional[List[Tuple[str, Any]]]:
        if isinstance(data, Mapping):
            return list(data.items())
        if is_mapped(data):
            return [
                (key, _detached(value))
                for key, value in vars(data).items()
                if not key.startswith("_")
            ]
        if isinstance(data, (str, bytes, bytearray, int, float, bool, list, tuple, set)):
            return None
        if data is not None and hasattr(data, "__dict__") and not isinstance(data, type):
            return list(vars(data).items())
        return None


def _detached(value: Any) -> Any:
    """Rebuild nested DTOs so a copied instance owns them; other values are shared."""
    if is_mapped(value):
        return type(value)(value)
    if isinstance(value, (list, tuple)):
        items = [type(item)(item) if is_mapped(item) else item for item in value]
        return tuple(items) if isinstance(value, tuple) else items
    return value
