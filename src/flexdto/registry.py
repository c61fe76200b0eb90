"""
Mapping Registry

Process-wide store of the alias and transform tables each DTO class
declares statically. Entries are written while a class is being defined
(``field()`` metadata, ``alias`` / ``transform`` decorators) and only read
afterwards.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple, Type, TypeVar
from weakref import WeakKeyDictionary

import structlog

from .fields import FieldSpec, TransformFn
from .exceptions import RegistrationError

logger = structlog.get_logger(__name__)

C = TypeVar("C", bound=type)


class MappingRegistry:
    """
    Registry of statically declared field metadata, keyed by class.

    Provides:
    - Alias and transform registration per class
    - Lookup merged along the MRO (subclass declarations win)
    """

    def __init__(self) -> None:
        self._aliases: "WeakKeyDictionary[type, Dict[str, List[str]]]" = WeakKeyDictionary()
        self._transforms: "WeakKeyDictionary[type, Dict[str, TransformFn]]" = WeakKeyDictionary()

    def register_alias(self, cls: type, field_name: str, *aliases: str) -> None:
        """Register alternative input keys for ``cls.field_name``."""
        table = self._aliases.setdefault(cls, {})
        table[field_name] = list(aliases)
        logger.debug(
            "Aliases registered",
            component="registry",
            dto=cls.__name__,
            field=field_name,
            aliases=list(aliases),
        )

    def register_transform(self, cls: type, field_name: str, fn: TransformFn) -> None:
        """Register the value transform for ``cls.field_name``."""
        if not callable(fn):
            raise RegistrationError(
                f"Transform for {cls.__name__}.{field_name} must be callable",
                target=f"{cls.__name__}.{field_name}",
            )
        self._transforms.setdefault(cls, {})[field_name] = fn
        logger.debug(
            "Transform registered", component="registry", dto=cls.__name__, field=field_name
        )

    def register_fields(self, cls: type, fields: Dict[str, FieldSpec]) -> None:
        """Register the metadata carried by the ``field()`` declarations of ``cls``.

        Only the fields ``cls`` declares itself are passed in; inherited
        metadata is picked up through the MRO at lookup time.
        """
        for spec in fields.values():
            if spec.aliases:
                self.register_alias(cls, spec.name, *spec.aliases)
            if spec.transform is not None:
                self.register_transform(cls, spec.name, spec.transform)

    def aliases_for(self, cls: type) -> Dict[str, List[str]]:
        """Merged alias table for ``cls`` and its bases."""
        merged: Dict[str, List[str]] = {}
        for klass in reversed(cls.__mro__):
            merged.update(self._aliases.get(klass, {}))
        return merged

    def transforms_for(self, cls: type) -> Dict[str, TransformFn]:
        """Merged transform table for ``cls`` and its bases."""
        merged: Dict[str, TransformFn] = {}
        for klass in reversed(cls.__mro__):
            merged.update(self._transforms.get(klass, {}))
        return merged

    def tables_for(self, cls: type) -> Tuple[Dict[str, List[str]], Dict[str, TransformFn]]:
        return self.aliases_for(cls), self.transforms_for(cls)


registry = MappingRegistry()


def _require_dto(cls: Any, decorator: str) -> None:
    if not isinstance(cls, type) or not isinstance(getattr(cls, "__flex_fields__", None), dict):
        raise RegistrationError(
            f"@{decorator} can only decorate FlexDto subclasses",
            target=getattr(cls, "__name__", repr(cls)),
        )


def alias(field_name: str, *aliases: str) -> Callable[[C], C]:
    """Class decorator declaring alternative input keys for a field.

    Example::

        @alias("centerId", "cen_id", "cenId")
        class Center(FlexDto):
            centerId: str = ""
    """

    def decorator(cls: C) -> C:
        _require_dto(cls, "alias")
        registry.register_alias(cls, field_name, *aliases)
        return cls

    return decorator


def transform(field_name: str, fn: TransformFn) -> Callable[[C], C]:
    """Class decorator declaring a value transform for a field.

    Example::

        @transform("amount", float)
        class Payment(FlexDto):
            amount: float = 0
    """

    def decorator(cls: C) -> C:
        _require_dto(cls, "transform")
        registry.register_transform(cls, field_name, fn)
        return cls

    return decorator


def get_aliases(cls: Type[Any]) -> Dict[str, List[str]]:
    return registry.aliases_for(cls)


def get_transforms(cls: Type[Any]) -> Dict[str, TransformFn]:
    return registry.transforms_for(cls)


__all__ = [
    "MappingRegistry",
    "alias",
    "get_aliases",
    "get_transforms",
    "registry",
    "transform",
]
