# strukt/c4/model.py
from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional

from ..constants import (
    TAG_COMPONENT,
    TAG_CONTAINER,
    TAG_ELEMENT,
    TAG_PERSON,
    TAG_RELATIONSHIP,
    TAG_SOFTWARE_SYSTEM,
)


class ElementKind(str, Enum):
    """Coarse element category used to pick relationship styles."""

    CUSTOM = "custom"
    STATIC = "static"


class InteractionStyle(str, Enum):
    SYNCHRONOUS = "Synchronous"


def _join_tags(tags: list[str]) -> str:
    return ",".join(tags)


class Element:
    kind: ElementKind = ElementKind.STATIC
    default_tag: str = ""

    def __init__(
        self,
        model: "Model",
        element_id: str,
        name: str,
        description: str = "",
        parent: Optional["Element"] = None,
    ) -> None:
        self.model = model
        self.id = element_id
        self.name = name
        self.description = description or ""
        self.parent = parent
        self.tags: list[str] = [TAG_ELEMENT, self.default_tag]
        self.relationships: list[Relationship] = []

    def add_tags(self, *tags: str) -> None:
        for tag in tags:
            if tag and tag not in self.tags:
                self.tags.append(tag)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def ancestors(self) -> Iterator["Element"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def is_child_of(self, other: "Element") -> bool:
        return any(a is other for a in self.ancestors())

    def has(self, destination: "Element", description: str) -> bool:
        """Whether a relationship with this description to destination exists."""
        return any(
            r.destination is destination and r.description == description
            for r in self.relationships
        )

    def uses(
        self,
        destination: "Element",
        description: str,
        technology: str = "",
        interaction_style: Optional[InteractionStyle] = None,
    ) -> Optional["Relationship"]:
        return self.model.add_relationship(
            self, destination, description, technology, interaction_style
        )

    def _base_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "tags": _join_tags(self.tags),
            "name": self.name,
            "description": self.description,
        }
        if self.relationships:
            out["relationships"] = [r.to_dict() for r in self.relationships]
        return out

    def to_dict(self) -> dict[str, Any]:
        return self._base_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id}, {self.name!r})"


class Person(Element):
    kind = ElementKind.CUSTOM
    default_tag = TAG_PERSON


class Component(Element):
    default_tag = TAG_COMPONENT


class Container(Element):
    default_tag = TAG_CONTAINER

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.components: list[Component] = []

    def add_component(self, name: str, description: str = "") -> Component:
        _require_unique_name(self.components, name, f"container {self.name!r}")
        component = Component(self.model, self.model.next_id(), name, description, self)
        self.components.append(component)
        self.model.register(component)
        return component

    def has_components(self) -> bool:
        return bool(self.components)

    def to_dict(self) -> dict[str, Any]:
        out = self._base_dict()
        if self.components:
            out["components"] = [c.to_dict() for c in self.components]
        return out


class SoftwareSystem(Element):
    default_tag = TAG_SOFTWARE_SYSTEM

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.containers: list[Container] = []

    def add_container(self, name: str, description: str = "") -> Container:
        _require_unique_name(self.containers, name, f"software system {self.name!r}")
        container = Container(self.model, self.model.next_id(), name, description, self)
        self.containers.append(container)
        self.model.register(container)
        return container

    def has_containers(self) -> bool:
        return bool(self.containers)

    def to_dict(self) -> dict[str, Any]:
        out = self._base_dict()
        if self.containers:
            out["containers"] = [c.to_dict() for c in self.containers]
        return out


class Relationship:
    def __init__(
        self,
        relationship_id: str,
        source: Element,
        destination: Element,
        description: str = "",
        technology: str = "",
        interaction_style: Optional[InteractionStyle] = None,
        linked_relationship_id: Optional[str] = None,
    ) -> None:
        self.id = relationship_id
        self.source = source
        self.destination = destination
        self.description = description or ""
        self.technology = technology or ""
        self.interaction_style = interaction_style
        self.linked_relationship_id = linked_relationship_id
        self.tags: list[str] = [TAG_RELATIONSHIP]
        if interaction_style is not None:
            self.tags.append(interaction_style.value)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "tags": _join_tags(self.tags),
            "sourceId": self.source.id,
            "destinationId": self.destination.id,
            "description": self.description,
        }
        if self.technology:
            out["technology"] = self.technology
        if self.interaction_style is not None:
            out["interactionStyle"] = self.interaction_style.value
        if self.linked_relationship_id is not None:
            out["linkedRelationshipId"] = self.linked_relationship_id
        return out

    def __repr__(self) -> str:
        return (
            f"Relationship({self.source.name!r} -> {self.destination.name!r}, "
            f"{self.description!r})"
        )


def _require_unique_name(siblings: list[Element], name: str, where: str) -> None:
    if not name or not name.strip():
        raise ValueError(f"An element name must be specified ({where})")
    if any(s.name == name for s in siblings):
        raise ValueError(f"An element named {name!r} already exists in {where}")


class Model:
    """Element/relationship store of a workspace."""

    def __init__(self, *, implied_relationships: bool = True) -> None:
        self.implied_relationships = implied_relationships
        self.people: list[Person] = []
        self.software_systems: list[SoftwareSystem] = []
        self.relationships: list[Relationship] = []
        self._elements: dict[str, Element] = {}
        self._last_id = 0

    def next_id(self) -> str:
        self._last_id += 1
        return str(self._last_id)

    def register(self, element: Element) -> None:
        self._elements[element.id] = element

    @property
    def elements(self) -> list[Element]:
        return list(self._elements.values())

    def get_element(self, element_id: str) -> Optional[Element]:
        return self._elements.get(element_id)

    def _top_level(self) -> list[Element]:
        return [*self.people, *self.software_systems]

    def add_person(self, name: str, description: str = "") -> Person:
        _require_unique_name(self._top_level(), name, "the model")
        person = Person(self, self.next_id(), name, description)
        self.people.append(person)
        self.register(person)
        return person

    def add_software_system(self, name: str, description: str = "") -> SoftwareSystem:
        _require_unique_name(self._top_level(), name, "the model")
        system = SoftwareSystem(self, self.next_id(), name, description)
        self.software_systems.append(system)
        self.register(system)
        return system

    def add_relationship(
        self,
        source: Element,
        destination: Element,
        description: str = "",
        technology: str = "",
        interaction_style: Optional[InteractionStyle] = None,
        *,
        create_implied: bool = True,
    ) -> Optional[Relationship]:
        """Add source -> destination; returns None when it already exists."""
        if source.is_child_of(destination) or destination.is_child_of(source):
            raise ValueError(
                "Relationships cannot be added between parents and children "
                f"({source.name!r} -> {destination.name!r})"
            )
        if source.has(destination, description):
            return None

        relationship = Relationship(
            self.next_id(), source, destination, description, technology, interaction_style
        )
        self._attach(relationship)

        if create_implied and self.implied_relationships:
            self._create_implied_relationships(relationship)
        return relationship

    def _attach(self, relationship: Relationship) -> None:
        relationship.source.relationships.append(relationship)
        self.relationships.append(relationship)

    def _create_implied_relationships(self, relationship: Relationship) -> None:
        # Lift the relationship to every ancestor pair unless the same one exists.
        sources = [relationship.source, *relationship.source.ancestors()]
        destinations = [relationship.destination, *relationship.destination.ancestors()]
        for src in sources:
            for dst in destinations:
                if src is relationship.source and dst is relationship.destination:
                    continue
                if src is dst or src.is_child_of(dst) or dst.is_child_of(src):
                    continue
                if src.has(dst, relationship.description):
                    continue
                self._attach(
                    Relationship(
                        self.next_id(),
                        src,
                        dst,
                        relationship.description,
                        relationship.technology,
                        relationship.interaction_style,
                        linked_relationship_id=relationship.id,
                    )
                )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.people:
            out["people"] = [p.to_dict() for p in self.people]
        if self.software_systems:
            out["softwareSystems"] = [s.to_dict() for s in self.software_systems]
        return out
