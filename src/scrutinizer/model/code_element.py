"""Hierarchical result tree shared by all analyzers.

Every analyzer writes its findings into CodeElement nodes rooted at the
project. Identity is (type, name) only, and a parent never holds two equal
children: adding a duplicate is silently ignored, so metrics, location and
descendants of the duplicate are lost. Use get_child() to extend a node that
may already exist.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

MetricValue = int | float | str | bool | None


@dataclass(frozen=True)
class Location:
    """Structured reference to where an element lives."""

    filename: str

    def to_dict(self) -> dict[str, str]:
        return {"filename": self.filename}


@dataclass(eq=False)
class CodeElement:
    """
    One node of the result tree (project, file, class, function, aggregate...).

    Example:
        root = CodeElement("project", "acme")
        file_element = CodeElement("file", "src/app.py", {"lines": 120})
        file_element.set_location("src/app.py")
        root.add_child(file_element)
    """

    type: str
    name: str
    metrics: dict[str, MetricValue] = field(default_factory=dict)
    location: Location | None = None
    _children: list["CodeElement"] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.type:
            raise ValueError("CodeElement type must be a non-empty string")
        if not self.name:
            raise ValueError("CodeElement name must be a non-empty string")
        # Callers may pass a mapping they keep using
        self.metrics = dict(self.metrics)

    @property
    def children(self) -> tuple["CodeElement", ...]:
        return tuple(self._children)

    def set_metric(self, key: str, value: MetricValue) -> None:
        self.metrics[key] = value

    def set_location(self, filename: str) -> None:
        self.location = Location(filename=filename)

    def add_child(self, child: "CodeElement") -> None:
        """
        Attach a child unless an equal one is already present.

        An equal child (same type and name) is discarded as a whole: no
        metric union, no replacement, no error.
        """
        for existing in self._children:
            if existing == child:
                return

        self._children.append(child)

    def get_child(self, element_type: str, name: str) -> "CodeElement | None":
        for child in self._children:
            if child.type == element_type and child.name == name:
                return child
        return None

    def flat_children(self) -> Iterator[dict[str, str]]:
        """Yield {type, name} of direct children, recomputed on each call."""
        for child in self._children:
            yield {"type": child.type, "name": child.name}

    def walk(self) -> Iterator["CodeElement"]:
        """Yield this element and all descendants, depth-first."""
        yield self
        for child in self._children:
            yield from child.walk()

    def equals(self, other: "CodeElement") -> bool:
        return self.type == other.type and self.name == other.name

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "metrics": dict(self.metrics),
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        data["children"] = list(self.flat_children())
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeElement):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.type, self.name))

    def __str__(self) -> str:
        return f"{self.type}({self.name})"
