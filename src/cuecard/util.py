""" Utility methods broadly applicable across the codebase. """

from __future__ import annotations

import re
from typing import Any, Optional

def fullname(o:Any) -> str:
    """ Fully qualified class name for an object (or class), for loggers. """
    # from https://stackoverflow.com/a/2020083/553580

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__  # Avoid reporting __builtin__
    else:
        return module + '.' + klass.__qualname__

def is_blank(name:Optional[str]) -> bool:
    """ True for None, non-strings, empty and whitespace-only strings. """
    return not isinstance(name, str) or name.strip() == ""

RE_CAMEL_TO_SNAKE_PHASE_1 = re.compile(r'(.)([A-Z][a-z]+)')
RE_CAMEL_TO_SNAKE_PHASE_2 = re.compile(r'([a-z0-9])([A-Z])')
def camel_to_snake(name: str) -> str:
    name = RE_CAMEL_TO_SNAKE_PHASE_1.sub(r'\1_\2', name)
    return RE_CAMEL_TO_SNAKE_PHASE_2.sub(r'\1_\2', name).lower()

def elipsis(string:str, max_length:int) -> str:
    if len(string) <= max_length:
        return string
    else:
        return string[:max_length-1] + "…"
