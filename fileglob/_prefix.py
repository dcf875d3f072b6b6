from __future__ import annotations

from ._exceptions import PatternSyntaxError
from ._syntax import SEPARATOR, Dynamic, classify_segment, contains_matchers, parse


def valid_pattern(pattern: str) -> PatternSyntaxError | None:
    """Return the parser error for *pattern*, or None when it is valid."""
    try:
        parse(pattern)
    except PatternSyntaxError as exc:
        return exc
    return None


def contains_wildcard(pattern: str) -> bool:
    """Report whether *pattern* contains any glob construct.

    Returns False for a pattern that does not parse; check it with
    :func:`valid_pattern` first when the distinction matters.
    """
    try:
        root = parse(pattern)
    except PatternSyntaxError:
        return False
    return contains_matchers(root)


def static_prefix(pattern: str) -> str:
    """Return the leading run of wildcard-free segments of *pattern*.

    Escapes are removed from the returned path. The result is ``"."`` when
    the first segment is already dynamic, or ``"/"`` for a rooted pattern.
    """
    rooted = pattern.startswith(SEPARATOR)
    parts: list[str] = []
    for segment in pattern.split(SEPARATOR):
        if not segment:
            continue
        try:
            kind = classify_segment(segment)
        except PatternSyntaxError as exc:
            raise PatternSyntaxError(segment, exc.reason, exc.position) from exc
        if isinstance(kind, Dynamic):
            break
        if kind.text:
            parts.append(kind.text)

    prefix = SEPARATOR.join(parts)
    if rooted:
        return SEPARATOR + prefix
    return prefix or "."
