"""Case conversion between snake_case and camelCase.

Both helpers are total and deterministic. ``to_snake`` is a heuristic: it
keeps acronym runs together (``userID`` -> ``user_id``) so it does not
always invert ``to_camel``.
"""

import re

_UNDERSCORE_LETTER = re.compile(r"_([a-z])")


def to_camel(value: str) -> str:
    """Convert snake_case to camelCase.

    Args:
        value: Name in snake_case (or any string).

    Returns:
        The name with every ``_x`` pair replaced by ``X``.

    Examples:
        >>> to_camel("user_id")
        'userId'
        >>> to_camel("userId")
        'userId'
    """
    if not value:
        return value
    return _UNDERSCORE_LETTER.sub(lambda match: match.group(1).upper(), value)


def to_snake(value: str) -> str:
    """Convert camelCase to snake_case.

    Args:
        value: Name in camelCase (or any string).

    Returns:
        The name with an underscore before each word boundary, lowercased.

    Examples:
        >>> to_snake("userName")
        'user_name'
        >>> to_snake("HTTPServer")
        'http_server'
    """
    if not value:
        return value

    result = []
    last = len(value) - 1
    for index, char in enumerate(value):
        if not char.isupper():
            result.append(char)
            continue

        prev_is_upper = index > 0 and value[index - 1].isupper()
        next_is_lower = index < last and value[index + 1].islower()
        if index > 0 and (not prev_is_upper or next_is_lower):
            result.append("_")
        result.append(char.lower())

    return "".join(result)


__all__ = ["to_camel", "to_snake"]
