"""Strict glob syntax parser.

The grammar is the path-separated glob dialect matched by
:mod:`fileglob._matcher`:

* ``*``           any run of characters within one path segment
* ``**``          any run of characters, separators included
* ``?``           exactly one character
* ``[abc]``       one of the listed characters (``[!abc]``/``[^abc]`` negates,
                  a leading ``]`` is a member)
* ``[a-z]``       one character in the range (negation as above)
* ``{a,b,...}``   alternation, alternatives may nest; ``{a}`` is just ``a``
* ``\\x``          the literal character ``x``

The parser rejects malformed input (unterminated classes or groups, reversed
ranges, a separator inside a class, a dangling escape) instead of reading it
as text.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ._exceptions import PatternSyntaxError


class NodeKind(enum.Enum):
    PATTERN = "pattern"
    TEXT = "text"
    ANY = "any"
    SUPER = "super"
    SINGLE = "single"
    LIST = "list"
    RANGE = "range"
    ALTERNATION = "alternation"
    NOTHING = "nothing"


@dataclass
class Node:
    kind: NodeKind
    text: str = ""
    negated: bool = False
    children: list[Node] = field(default_factory=list)
    #: ``(lo, hi)`` pairs of a RANGE or LIST class
    ranges: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class Literal:
    """A segment without wildcards; ``text`` has its escapes removed."""
    text: str


@dataclass(frozen=True)
class Dynamic:
    """A segment containing at least one wildcard construct."""
    segment: str


_EOF = "unexpected end of input"
SEPARATOR = "/"


class _Parser:
    def __init__(self, source: str) -> None:
        self._src = source
        self._pos = 0

    def _error(self, reason: str, position: int | None = None) -> PatternSyntaxError:
        return PatternSyntaxError(
            self._src, reason, self._pos if position is None else position
        )

    def parse(self) -> Node:
        root = self._sequence(depth=0)
        if not root.children:
            return Node(NodeKind.NOTHING)
        return root

    def _sequence(self, depth: int) -> Node:
        node = Node(NodeKind.PATTERN)
        text: list[str] = []

        def flush() -> None:
            if text:
                node.children.append(Node(NodeKind.TEXT, text="".join(text)))
                text.clear()

        while self._pos < len(self._src):
            c = self._src[self._pos]
            if depth > 0 and c in ",}":
                break
            if c == "\\":
                if self._pos + 1 >= len(self._src):
                    raise self._error(_EOF + " after escape")
                text.append(self._src[self._pos + 1])
                self._pos += 2
            elif c == "*":
                flush()
                start = self._pos
                while self._pos < len(self._src) and self._src[self._pos] == "*":
                    self._pos += 1
                kind = NodeKind.ANY if self._pos - start == 1 else NodeKind.SUPER
                node.children.append(Node(kind))
            elif c == "?":
                flush()
                self._pos += 1
                node.children.append(Node(NodeKind.SINGLE))
            elif c == "[":
                flush()
                node.children.append(self._class())
            elif c == "{":
                flush()
                node.children.append(self._alternation(depth))
            else:
                text.append(c)
                self._pos += 1
        flush()
        return node

    def _class(self) -> Node:
        start = self._pos
        self._pos += 1
        negated = False
        if self._pos < len(self._src) and self._src[self._pos] in "!^":
            negated = True
            self._pos += 1
        # (char, is_range_dash) pairs; escaped dashes are plain members
        items: list[tuple[str, bool]] = []
        while True:
            if self._pos >= len(self._src):
                raise self._error(_EOF, start)
            c = self._src[self._pos]
            if c == "]" and items:
                self._pos += 1
                break
            if c == "\\":
                if self._pos + 1 >= len(self._src):
                    raise self._error(_EOF + " after escape")
                c = self._src[self._pos + 1]
                self._pos += 2
                is_dash = False
            else:
                self._pos += 1
                is_dash = c == "-"
            if c == SEPARATOR:
                raise self._error("separator in character class", self._pos - 1)
            items.append((c, is_dash))

        chars: list[str] = []
        ranges: list[tuple[str, str]] = []
        i = 0
        while i < len(items):
            c = items[i][0]
            if i + 2 < len(items) and items[i + 1][1]:
                lo, hi = c, items[i + 2][0]
                if lo > hi:
                    raise self._error(f"invalid character range {lo}-{hi}", start)
                ranges.append((lo, hi))
                i += 3
            else:
                chars.append(c)
                i += 1
        if len(ranges) == 1 and not chars:
            lo, hi = ranges[0]
            return Node(NodeKind.RANGE, text=lo + hi, negated=negated, ranges=ranges)
        return Node(NodeKind.LIST, text="".join(chars), negated=negated, ranges=ranges)

    def _alternation(self, depth: int) -> Node:
        start = self._pos
        self._pos += 1
        node = Node(NodeKind.ALTERNATION)
        while True:
            node.children.append(self._sequence(depth + 1))
            if self._pos >= len(self._src):
                raise self._error(_EOF, start)
            c = self._src[self._pos]
            self._pos += 1
            if c == "}":
                return node


def parse(pattern: str) -> Node:
    """Parse *pattern* into an AST, raising PatternSyntaxError when malformed."""
    return _Parser(pattern).parse()


def contains_matchers(node: Node) -> bool:
    if node.kind is NodeKind.PATTERN:
        return any(contains_matchers(child) for child in node.children)
    return node.kind not in (NodeKind.TEXT, NodeKind.NOTHING)


def classify_segment(segment: str) -> Literal | Dynamic:
    """Classify one path segment.

    A segment is literal when it parses to nothing at all or to exactly one
    text node. Anything else (several nodes, or a single wildcard, class,
    alternation, ...) is dynamic.
    """
    root = parse(segment)
    if root.kind is NodeKind.NOTHING:
        return Literal("")
    if len(root.children) == 1 and root.children[0].kind is NodeKind.TEXT:
        return Literal(root.children[0].text)
    return Dynamic(segment)
