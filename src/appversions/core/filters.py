"""Name filters given on the command line.

Every pattern is a regular expression searched anywhere in the name. A name
passes only if it matches all patterns; an empty filter passes everything.
"""

import re
from collections.abc import Iterable


def compile_filters(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile command line patterns.

    Raises:
        ValueError: If a pattern is not a valid regular expression
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ValueError(f"Invalid filter pattern {pattern!r}: {e}") from e
    return compiled


def matches_all(name: str, filters: Iterable[re.Pattern[str]]) -> bool:
    return all(f.search(name) is not None for f in filters)
