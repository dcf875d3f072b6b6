from __future__ import annotations

from wcmatch import glob as wcglob

from . import _syntax
from ._syntax import Node, NodeKind

# `*` crosses no separator, `**` as a whole segment spans zero or more
# directories, `{a,b}` alternates, and hidden entries are not special.
MATCH_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTGLOB | wcglob.FORCEUNIX


def _text(text: str) -> str:
    # bracex splits on bare commas, wcmatch.escape leaves them alone
    return wcglob.escape(text, unix=True).replace(",", "\\,")


def _member(c: str) -> str:
    return c if c.isalnum() else "\\" + c


def render(node: Node) -> str:
    """Write *node* back out in the syntax wcmatch compiles.

    Literal text is fully escaped and an alternation with a single
    alternative is written as that alternative, so wcmatch sees exactly
    the constructs the parser found.
    """
    kind = node.kind
    if kind is NodeKind.PATTERN:
        return "".join(render(child) for child in node.children)
    if kind is NodeKind.TEXT:
        return _text(node.text)
    if kind is NodeKind.ANY:
        return "*"
    if kind is NodeKind.SUPER:
        return "**"
    if kind is NodeKind.SINGLE:
        return "?"
    if kind in (NodeKind.LIST, NodeKind.RANGE):
        members = "" if kind is NodeKind.RANGE else "".join(map(_member, node.text))
        members += "".join(_member(lo) + "-" + _member(hi) for lo, hi in node.ranges)
        return "[" + ("!" if node.negated else "") + members + "]"
    if kind is NodeKind.ALTERNATION:
        alternatives = [render(child) for child in node.children]
        if len(alternatives) == 1:
            return alternatives[0]
        return "{" + ",".join(alternatives) + "}"
    return ""


class Matcher:
    """Compiled predicate over ``/``-separated candidate paths.

    Raises PatternSyntaxError for malformed input, which wcmatch alone would
    accept as literal text.
    """

    __slots__ = ("pattern", "_compiled")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        # limit=0: no cap on the number of brace expansions
        self._compiled = wcglob.compile(
            render(_syntax.parse(pattern)), flags=MATCH_FLAGS, limit=0
        )

    def match(self, path: str) -> bool:
        return self._compiled.match(path)

    def __repr__(self) -> str:
        return f"Matcher({self.pattern!r})"


def compile_pattern(pattern: str) -> Matcher:
    return Matcher(pattern)


def quote_meta(text: str) -> str:
    """Escape every glob meta character in *text*.

    ``quote_meta("{foo*}")`` returns ``"\\{foo\\*\\}"``.
    """
    return wcglob.escape(text, unix=True)
