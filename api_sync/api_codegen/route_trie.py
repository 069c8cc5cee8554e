"""Route trie construction from a flat list of contract routes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from .contract import RouteDescriptor

PATH_SEPARATOR: Final[str] = "/"
DYNAMIC_MARKER: Final[str] = ":"
# Every dynamic segment is keyed by this sentinel, whatever its parameter name
DYNAMIC_KEY: Final[str] = ":id"
# Streaming routes are stored under this key instead of their HTTP verb
STREAM_METHOD_KEY: Final[str] = "sse"


@dataclass(frozen=True, slots=True)
class TrieNode:
    """One path segment of the route trie.

    ``methods`` and ``children`` are read-only views that keep
    first-insertion order.
    """

    methods: Mapping[str, RouteDescriptor]
    children: Mapping[str, TrieNode]
    is_dynamic: bool = False


@dataclass(slots=True)
class _NodeBuilder:
    is_dynamic: bool = False
    methods: dict[str, RouteDescriptor] = field(default_factory=dict)
    children: dict[str, _NodeBuilder] = field(default_factory=dict)

    def child(self, key: str, is_dynamic: bool) -> _NodeBuilder:
        node = self.children.get(key)
        if node is None:
            node = self.children[key] = _NodeBuilder(is_dynamic=is_dynamic)
        return node

    def freeze(self) -> TrieNode:
        return TrieNode(
            methods=MappingProxyType(dict(self.methods)),
            children=_freeze_children(self.children),
            is_dynamic=self.is_dynamic,
        )


def _freeze_children(children: dict[str, _NodeBuilder]) -> Mapping[str, TrieNode]:
    return MappingProxyType({key: node.freeze() for key, node in children.items()})


def normalize_prefix(prefix: str | None) -> str:
    """Normalize a path prefix to exactly one leading separator and none trailing.

    Returns an empty string when there is nothing to strip.

    Examples:
        >>> normalize_prefix("billingRestfulApi/")
        '/billingRestfulApi'
        >>> normalize_prefix("/")
        ''
    """
    trimmed = (prefix or "").strip(PATH_SEPARATOR)
    return f"{PATH_SEPARATOR}{trimmed}" if trimmed else ""


def strip_prefix(path: str, prefix: str) -> str:
    """Remove an already-normalized prefix from ``path`` on a literal leading match."""
    if not prefix or not path.startswith(prefix):
        return path
    return path[len(prefix):] or PATH_SEPARATOR


def path_segments(path: str) -> list[str]:
    """Split a path on the separator, dropping empty segments."""
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def canonical_segment(segment: str) -> tuple[str, bool]:
    """Return the trie key for a segment and whether it is dynamic."""
    if segment.startswith(DYNAMIC_MARKER):
        return DYNAMIC_KEY, True
    return segment, False


def route_method_key(route: RouteDescriptor) -> str:
    return STREAM_METHOD_KEY if route.sse else route.method_key


def build_route_trie(
    routes: Iterable[RouteDescriptor],
    prefix: str | None = None,
) -> Mapping[str, TrieNode]:
    """Group routes into a path-segment tree.

    Routes whose path is empty after prefix stripping are skipped. A
    route landing on an occupied node and method key replaces the
    earlier one.
    """
    normalized = normalize_prefix(prefix)
    root = _NodeBuilder()

    for route in routes:
        segments = path_segments(strip_prefix(route.path, normalized))
        if not segments:
            continue

        node = root
        for segment in segments:
            node = node.child(*canonical_segment(segment))
        node.methods[route_method_key(route)] = route

    return _freeze_children(root.children)
