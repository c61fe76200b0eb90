"""
Field resolution: which declared field does a raw payload key populate?

Resolution order (first match wins):

1. exact match
2. camelCase projection of the key
3. alias table, in table order
4. alias table, in field order
5. camelCase projection of an undeclared key, if that name is free
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from .casing import to_camel

NAME_SEPARATOR = "_"


class FieldResolver:
    """Maps raw payload keys onto field names of one DTO instance."""

    def __init__(
        self,
        fields: Iterable[str],
        aliases: Mapping[str, Sequence[str]],
        is_assignable: Callable[[str], bool],
    ):
        """
        Args:
            fields: Known field names, in declaration order
            aliases: Merged alias table (field -> alternative keys)
            is_assignable: False when a name is bound to a method or accessor
        """
        self.fields: List[str] = list(dict.fromkeys(fields))
        self._known = set(self.fields)
        self.aliases = aliases
        self.is_assignable = is_assignable

    def match(self, key: str) -> Optional[str]:
        """Find the field for ``key`` without applying the write guardrail."""
        if not isinstance(key, str) or key.startswith(NAME_SEPARATOR):
            return None

        if key in self._known:
            return key

        camel_key = to_camel(key)
        if camel_key in self._known:
            return camel_key

        candidates = (key, camel_key)
        for field_name, field_aliases in self.aliases.items():
            if field_name in self._known and _listed(field_aliases, candidates):
                return field_name

        for field_name in self.fields:
            field_aliases = self.aliases.get(field_name)
            if field_aliases and _listed(field_aliases, candidates):
                return field_name

        if (
            camel_key
            and camel_key != key
            and not camel_key.startswith(NAME_SEPARATOR)
            and self.is_assignable(camel_key)
        ):
            return camel_key

        return None

    def resolve(self, key: str) -> Optional[str]:
        """Find the field ``key`` may be written to, or None to drop it.

        A key containing ``_`` is only ever written under its camelCase
        projection, so snake_case spellings never land on the instance.
        """
        target = self.match(key)
        if target is None or target.startswith(NAME_SEPARATOR):
            return None
        if target == to_camel(key) or NAME_SEPARATOR not in key:
            return target
        return None


def _listed(field_aliases: Sequence[str], candidates: Sequence[str]) -> bool:
    return any(candidate in field_aliases for candidate in candidates)
