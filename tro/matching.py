"""Select exactly one board, list or card by a name pattern."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TypeVar

from tro.errors import AmbiguousMatchError, InvalidPatternError, NotFoundError
from tro.models import Named

T = TypeVar("T", bound=Named)


def compile_pattern(pattern: str, ignore_case: bool = True) -> re.Pattern[str]:
    """Compile a user supplied name filter.

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression.
    """
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def match_object(
    objects: Sequence[T],
    pattern: str,
    ignore_case: bool = True,
    type_label: str | None = None,
) -> T:
    """Return the single object whose name matches ``pattern``.

    The pattern is searched anywhere in each name. Ambiguity is never
    resolved on the caller's behalf: two or more matches is an error that
    lists every candidate so the filter can be refined.

    Args:
        objects: Candidate boards, lists or cards.
        pattern: Regular expression to search for in each name.
        ignore_case: Match case-insensitively when True.
        type_label: Label used in error messages. Defaults to the type
            label of the candidates.

    Returns:
        The only matching object.

    Raises:
        InvalidPatternError: If the pattern does not compile.
        NotFoundError: If nothing matches.
        AmbiguousMatchError: If more than one object matches.
    """
    regex = compile_pattern(pattern, ignore_case=ignore_case)
    matches = [obj for obj in objects if regex.search(obj.name)]
    label = type_label or (objects[0].type_label if objects else "Object")

    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise NotFoundError(label, pattern)
    raise AmbiguousMatchError(label, pattern, [obj.name for obj in matches])
