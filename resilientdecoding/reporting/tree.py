"""
Path-keyed error aggregation.

Each node of the tree corresponds to one coding path segment and holds the
errors reported exactly at that path. Insertion order is preserved; printing
orders segments and lines so the output is deterministic.
"""

from typing import Iterable, Sequence

from ..core.errors import DecodeError, PathSegment


def describe_segment(segment: PathSegment) -> str:
    """Printable form of a path segment."""
    if isinstance(segment, int):
        return f"Index {segment}"
    return segment


def segment_sort_key(segment: PathSegment) -> tuple[int, int, str]:
    """Indices sort numerically ahead of keys, keys sort lexically."""
    if isinstance(segment, int):
        return (0, segment, "")
    return (1, 0, segment)


def abridged_description(error: Exception) -> str:
    if isinstance(error, DecodeError):
        return error.abridged_description()
    return str(error) or type(error).__name__


class PathNode:
    """A node in the error tree."""

    __slots__ = ("children", "errors")

    def __init__(self) -> None:
        self.children: dict[PathSegment, "PathNode"] = {}
        self.errors: list[Exception] = []

    def insert(self, error: Exception, path: Sequence[PathSegment]) -> None:
        """Insert an error at the provided path, creating nodes as needed."""
        node = self
        for segment in path:
            child = node.children.get(segment)
            if child is None:
                child = node.children[segment] = PathNode()
            node = child
        node.errors.append(error)

    def iter_errors(self) -> Iterable[Exception]:
        """Depth-first: this node's errors, then each child in insertion order."""
        yield from self.errors
        for child in self.children.values():
            yield from child.iter_errors()

    def description_lines(self) -> list[str]:
        error_lines = sorted("- " + abridged_description(error) for error in self.errors)
        child_lines: list[str] = []
        for segment in sorted(self.children, key=segment_sort_key):
            child_lines.append(describe_segment(segment))
            child_lines.extend(
                "  " + line for line in self.children[segment].description_lines()
            )
        return error_lines + child_lines


class ErrorTree:
    """Append-only multi-map from coding paths to errors."""

    def __init__(self) -> None:
        self.root = PathNode()
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def insert(self, error: Exception, path: Sequence[PathSegment]) -> None:
        self.root.insert(error, path)
        self._count += 1

    def errors(self) -> list[Exception]:
        return list(self.root.iter_errors())

    def description_lines(self) -> list[str]:
        return self.root.description_lines()
