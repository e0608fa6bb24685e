"""Functions available to template expressions.

The table is closed: templates can call exactly these names, either as
functions (`{{ upper(project_name) }}`) or as filters
(`{{ project_name | kebab }}`).
"""

import os
import posixpath
import re
from collections.abc import Callable
from typing import Any

from jinja2 import Undefined

from kitcraft.integrations.time.abc import Time

TemplateFunction = Callable[..., Any]

NOW_FORMAT = "%Y-%m-%d %H:%M:%S"

_WORD_BOUNDARY = re.compile(r"[\s_\-]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def split_words(value: str) -> list[str]:
    """Split on whitespace, hyphens, underscores and camelCase boundaries."""
    words: list[str] = []
    for chunk in _WORD_BOUNDARY.split(value.strip()):
        words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return words


def kebab(value: str) -> str:
    return "-".join(word.lower() for word in split_words(value))


def snake(value: str) -> str:
    return "_".join(word.lower() for word in split_words(value))


def camel(value: str) -> str:
    words = split_words(value)
    if not words:
        return value
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def pascal(value: str) -> str:
    return "".join(word.capitalize() for word in split_words(value))


def default(value: Any, fallback: str) -> Any:
    """Return fallback when value is empty or not defined."""
    if isinstance(value, Undefined) or value is None or value == "":
        return fallback
    return value


def _ext(path: str) -> str:
    return posixpath.splitext(path)[1]


def build_template_functions(time: Time) -> dict[str, TemplateFunction]:
    """Build the function table, binding date functions to a clock."""
    return {
        # String manipulation
        "upper": lambda value: str(value).upper(),
        "lower": lambda value: str(value).lower(),
        "title": lambda value: str(value).title(),
        "trim": lambda value: str(value).strip(),
        "replace": lambda value, old, new: str(value).replace(old, new),
        "contains": lambda value, sub: sub in str(value),
        "has_prefix": lambda value, prefix: str(value).startswith(prefix),
        "has_suffix": lambda value, suffix: str(value).endswith(suffix),
        # Path manipulation
        "base": lambda path: posixpath.basename(str(path).rstrip("/")),
        "dir": lambda path: posixpath.dirname(str(path)) or ".",
        "ext": lambda path: _ext(str(path)),
        "join": lambda *parts: posixpath.join(*(str(part) for part in parts)),
        # Case conversion
        "kebab": kebab,
        "snake": snake,
        "camel": camel,
        "pascal": pascal,
        # Utilities
        "now": lambda: time.now().strftime(NOW_FORMAT),
        "date": lambda fmt: time.now().strftime(fmt),
        "env": lambda name: os.environ.get(name, ""),
        "default": default,
    }
