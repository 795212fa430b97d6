"""Whitespace normalization for element text."""

import re

# Runs of one whitespace character each; mixed runs such as "\r\n" need a
# second pass to collapse into a single space.
_WHITESPACE_RUNS = re.compile(r"\r+|\n+|\t+|( )+")


def normalize_whitespace(raw: str) -> str:
    """Collapse whitespace runs in ``raw`` to single spaces and trim the ends.

    The result is idempotent: normalizing an already-normalized string
    returns it unchanged.

    Examples:
        >>> normalize_whitespace("a\\n\\n\\t  b")
        'a b'
        >>> normalize_whitespace("   ")
        ''
    """
    result = _WHITESPACE_RUNS.sub(" ", raw)
    result = _WHITESPACE_RUNS.sub(" ", result)
    return result.strip()
