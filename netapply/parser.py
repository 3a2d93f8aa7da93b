# This file is part of netapply. See LICENSE file for license information.
"""Reader for the indented network-config document format.

Only the subset of the format used by network-config documents is
understood: nested mappings, sequences of scalars or mappings, scalars and
single-line flow sequences (``[a, b]``).  Lines which do not fit one of
these shapes are dropped without complaint.

Parsing is done in two passes.  The first pass builds every container as a
mapping, because a line like ``addresses:`` does not say whether a mapping
or a sequence follows; ``- item`` lines are collected on the side.  The
second pass turns every container which collected items into a
:class:`Sequence`.
"""

import re
from typing import Dict, Iterator, List, Optional, Tuple, Union

_SEQUENCE_ITEM_RE = re.compile(r"^-\s+(?P<rest>\S.*)$")
_KEY_VALUE_RE = re.compile(
    r"^(?P<key>[^\s:#'\"\[\]-][^:]*?|-[^\s:][^:]*?)\s*:"
    r"(?:\s+(?P<value>.*?))?\s*$"
)
_INLINE_COMMENT_RE = re.compile(r"\s+#.*$")
_QUOTES = ("'", '"')


class Node:
    """Base class of the document tree."""

    __slots__ = ()


class Scalar(Node):
    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Scalar) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return "Scalar(%r)" % self.value

    def __str__(self):
        return self.value


class Mapping(Node):
    """An ordered mapping of unique string keys to nodes."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Dict[str, Node]] = None):
        self._entries = dict(entries or {})

    def get(self, key: str, default=None):
        return self._entries.get(key, default)

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    def __getitem__(self, key: str) -> Node:
        return self._entries[key]

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other):
        return isinstance(other, Mapping) and self._entries == other._entries

    __hash__ = None

    def __repr__(self):
        return "Mapping(%r)" % self._entries


class Sequence(Node):
    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items = tuple(items)

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other):
        return isinstance(other, Sequence) and self._items == other._items

    def __hash__(self):
        return hash(self._items)

    def __repr__(self):
        return "Sequence(%r)" % (list(self._items),)


class _Container:
    """A mapping under construction.

    ``items`` is the pending-sequence collector: it stays None until the
    first ``- item`` line is seen under this container.
    """

    def __init__(self):
        self.entries: Dict[str, Union["_Container", Node]] = {}
        self.items: Optional[List[Union["_Container", Node]]] = None


def _clean_scalar(value: str) -> str:
    if value[:1] in _QUOTES:
        end = value.find(value[0], 1)
        if end > 0:
            return value[1:end]
        return value
    return _INLINE_COMMENT_RE.sub("", value)


def _scalar_or_flow(value: str) -> Node:
    if value[:1] in _QUOTES:
        return Scalar(_clean_scalar(value))
    value = _clean_scalar(value)
    if value.startswith("[") and value.endswith("]"):
        parts = [part.strip() for part in value[1:-1].split(",")]
        return Sequence(Scalar(_clean_scalar(p)) for p in parts if p)
    return Scalar(value)


def _key_value(text: str) -> Optional[Tuple[str, Optional[str]]]:
    """Split a ``key: value`` line; a value that is only a comment is None."""
    pair = _KEY_VALUE_RE.match(text)
    if not pair:
        return None
    value = pair.group("value")
    if value and value.startswith("#"):
        value = None
    return pair.group("key"), value


def _fixup(node) -> Node:
    if not isinstance(node, _Container):
        return node
    if node.items is not None:
        return Sequence(_fixup(item) for item in node.items)
    return Mapping({key: _fixup(value) for key, value in node.entries.items()})


def parse(text: str) -> Node:
    """Parse network-config text into a tree of nodes.

    The result is a :class:`Mapping`, or a :class:`Sequence` when the
    top level of the document is a list.  A key without an inline value and
    without children yields an empty :class:`Mapping`.
    """
    root = _Container()
    stack: List[Tuple[_Container, int]] = [(root, -1)]

    for line in text.splitlines():
        content = line.strip()
        if not content or content.startswith("#"):
            continue
        indent = len(line) - len(line.lstrip())
        while stack[-1][1] >= indent:
            stack.pop()
        parent = stack[-1][0]

        item = _SEQUENCE_ITEM_RE.match(content)
        if item:
            rest = item.group("rest")
            if parent.items is None:
                parent.items = []
            pair = _key_value(rest)
            if not pair:
                parent.items.append(_scalar_or_flow(rest))
                continue
            element = _Container()
            parent.items.append(element)
            stack.append((element, indent))
            key, value = pair
            if value:
                element.entries[key] = _scalar_or_flow(value)
            else:
                child = _Container()
                element.entries[key] = child
                key_column = indent + len(content) - len(rest)
                stack.append((child, key_column))
            continue

        pair = _key_value(content)
        if not pair:
            continue
        key, value = pair
        if value:
            parent.entries[key] = _scalar_or_flow(value)
        else:
            child = _Container()
            parent.entries[key] = child
            stack.append((child, indent))

    return _fixup(root)


def _quote(value: str) -> str:
    needs_quotes = (
        not value
        or value != value.strip()
        or value[0] in "'\"[#"
        or _KEY_VALUE_RE.match(value)
        or _INLINE_COMMENT_RE.search(value)
    )
    if not needs_quotes:
        return value
    quote = "'" if '"' in value else '"'
    return quote + value + quote


def _dump_value(key: str, node: Node, pad: str, indent: int) -> List[str]:
    if isinstance(node, Scalar):
        return ["%s%s: %s" % (pad, key, _quote(node.value))]
    if isinstance(node, Sequence) and not len(node):
        return ["%s%s: []" % (pad, key)]
    return ["%s%s:" % (pad, key)] + _dump(node, indent)


def _dump(node: Node, indent: int) -> List[str]:
    pad = " " * indent
    lines: List[str] = []
    if isinstance(node, Mapping):
        for key, value in node.items():
            lines.extend(_dump_value(key, value, pad, indent + 2))
    elif isinstance(node, Sequence):
        for item in node:
            if isinstance(item, Scalar):
                lines.append("%s- %s" % (pad, _quote(item.value)))
            elif isinstance(item, Mapping) and len(item):
                entries = list(item.items())
                key, value = entries[0]
                first = _dump_value(key, value, pad + "- ", indent + 4)
                lines.extend(first)
                for key, value in entries[1:]:
                    lines.extend(
                        _dump_value(key, value, pad + "  ", indent + 4)
                    )
            else:
                raise ValueError("Cannot render sequence item %r" % (item,))
    else:
        raise ValueError("Cannot render %r" % (node,))
    return lines


def dumps(node: Node) -> str:
    """Render a tree produced by :func:`parse` back into text.

    Mappings are indented by two spaces and sequence items are indented
    under their key, so ``parse(dumps(tree)) == tree``.
    """
    lines = _dump(node, 0)
    return "\n".join(lines) + "\n" if lines else ""


def to_python(node: Node):
    """Convert a tree into plain dicts, lists and strings."""
    if isinstance(node, Scalar):
        return node.value
    if isinstance(node, Mapping):
        return {key: to_python(value) for key, value in node.items()}
    return [to_python(item) for item in node]
