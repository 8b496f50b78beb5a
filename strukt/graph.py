from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TypeVar, Union

T = TypeVar("T")


class ContainerKind(str, Enum):
    SERVICE = "Service"
    STORAGE = "Storage"
    QUEUE = "Queue"


@dataclass(frozen=True)
class Tag:
    """Landscape key; systems sharing a tag are drawn in one landscape view."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class System:
    landscapes: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class Person:
    pass


@dataclass(frozen=True)
class Component:
    pass


@dataclass(frozen=True)
class Container:
    kind: Optional[ContainerKind] = None
    systems: tuple["Item", ...] = ()


# Unknown YAML types are kept as plain strings.
TypeTag = Union[System, Person, Container, Component, str]


class _Typed:
    types: tuple[TypeTag, ...]

    def has_type(self, cls: type) -> bool:
        return any(isinstance(t, cls) for t in self.types)

    def as_type(self, cls: type[T]) -> Optional[T]:
        for t in self.types:
            if isinstance(t, cls):
                return t
        return None


@dataclass(frozen=True)
class Item(_Typed):
    """Lightweight named reference, e.g. a system a container belongs to."""

    name: str
    description: str = ""
    types: tuple[TypeTag, ...] = ()


@dataclass(frozen=True)
class Interaction:
    summary: str = ""


@dataclass(eq=False)
class Vertex(_Typed):
    """Graph node. Equality and hashing are by identity."""

    name: str
    summary: str = ""
    types: tuple[TypeTag, ...] = ()
    id: str = ""
    edges: list[tuple[Interaction, "Vertex"]] = field(default_factory=list)
    composed: list["Vertex"] = field(default_factory=list)
    aggregated: list["Vertex"] = field(default_factory=list)

    def uses(self, destination: "Vertex", summary: str = "") -> "Vertex":
        self.edges.append((Interaction(summary), destination))
        return self

    def compose(self, *children: "Vertex") -> "Vertex":
        self.composed.extend(c for c in dict.fromkeys(children) if c not in self.composed)
        return self

    def aggregate(self, *children: "Vertex") -> "Vertex":
        self.aggregated.extend(c for c in dict.fromkeys(children) if c not in self.aggregated)
        return self

    def __repr__(self) -> str:
        return f"Vertex({self.id or self.name!r})"
