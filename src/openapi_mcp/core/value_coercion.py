"""Conversion of argument values into their URL/header string form"""

import json
from typing import Any


def to_parameter_string(value: Any) -> str:
    """
    Convert a JSON-typed argument value into its textual form.

    Strings pass through unquoted, booleans become ``true``/``false``,
    numbers use their JSON text, ``None`` becomes an empty string, and
    arrays/objects are emitted as compact raw JSON.

    Examples:
        >>> to_parameter_string("Alice")
        'Alice'
        >>> to_parameter_string(True)
        'true'
        >>> to_parameter_string([1, 2])
        '[1,2]'
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    return to_json_text(value)


def to_json_text(value: Any) -> str:
    """Compact JSON text of a value, non-ASCII kept as UTF-8"""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
