"""Hooks applied to every generated SPARQL text before it is parsed.

A rebase hook is any ``Callable[[str], str]``. It may only adjust
endpoint-relative addressing, never the triple content, and applying it
twice must give the same text as applying it once.
"""

import re
from typing import Callable

Rebase = Callable[[str], str]

_BASE_DECL = re.compile(r"^\s*BASE\s*<", re.IGNORECASE)


def no_rebase(sparql: str) -> str:
    return sparql


class BaseRebaser:
    """resolves relative iris in the text against a fixed base

    :param base_uri: the base to declare
    :type base_uri: str
    """

    def __init__(self, base_uri: str):
        self.base_uri = base_uri

    def __call__(self, sparql: str) -> str:
        if _BASE_DECL.match(sparql):
            return sparql  # already declares its own base
        return f"BASE <{self.base_uri}>\n{sparql}"

    def __repr__(self):
        return f"BaseRebaser({self.base_uri!r})"
