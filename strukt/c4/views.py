# strukt/c4/views.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .model import (
    Component,
    Container,
    Element,
    Model,
    Person,
    Relationship,
    SoftwareSystem,
)


class RankDirection(str, Enum):
    TOP_BOTTOM = "TopBottom"
    BOTTOM_TOP = "BottomTop"
    LEFT_RIGHT = "LeftRight"
    RIGHT_LEFT = "RightLeft"


class Shape(str, Enum):
    BOX = "Box"
    ROUNDED_BOX = "RoundedBox"
    PERSON = "Person"
    HEXAGON = "Hexagon"
    CYLINDER = "Cylinder"
    PIPE = "Pipe"


@dataclass(frozen=True)
class AutomaticLayout:
    rank_direction: RankDirection
    rank_separation: int = 300
    node_separation: int = 300
    edge_separation: int = 0
    vertices: bool = False
    implementation: str = "Graphviz"

    def to_dict(self) -> dict[str, Any]:
        return {
            "implementation": self.implementation,
            "rankDirection": self.rank_direction.value,
            "rankSeparation": self.rank_separation,
            "nodeSeparation": self.node_separation,
            "edgeSeparation": self.edge_separation,
            "vertices": self.vertices,
        }


class ElementNotPermittedInView(ValueError):
    pass


class StaticView:
    """Base for views that show a subset of model elements and relationships.

    Adding an element also adds every model relationship between it and the
    elements already in the view; removing an element drops its relationships.
    """

    def __init__(self, model: Model, key: str, description: str = "") -> None:
        self.model = model
        self.key = key
        self.description = description or ""
        self.automatic_layout: Optional[AutomaticLayout] = None
        self._elements: dict[str, Element] = {}
        self._relationships: dict[str, Relationship] = {}

    @property
    def elements(self) -> list[Element]:
        return list(self._elements.values())

    @property
    def relationships(self) -> list[Relationship]:
        return list(self._relationships.values())

    def contains(self, element: Element) -> bool:
        return element.id in self._elements

    def _check_element_can_be_added(self, element: Element) -> None:
        raise NotImplementedError

    def _check_parent_and_children_not_added(self, element: Element) -> None:
        for ancestor in element.ancestors():
            if self.contains(ancestor):
                raise ElementNotPermittedInView(
                    f"The parent of {element.name!r} is already in view {self.key!r}"
                )
        for present in self._elements.values():
            if present.is_child_of(element):
                raise ElementNotPermittedInView(
                    f"A child of {element.name!r} is already in view {self.key!r}"
                )

    def add(self, element: Element) -> None:
        if self.contains(element):
            return
        self._check_element_can_be_added(element)
        self._elements[element.id] = element
        for relationship in self.model.relationships:
            if relationship.id in self._relationships:
                continue
            src, dst = relationship.source, relationship.destination
            if (src is element and self.contains(dst)) or (
                dst is element and self.contains(src)
            ):
                self._relationships[relationship.id] = relationship

    def _try_add(self, element: Element) -> None:
        try:
            self.add(element)
        except ElementNotPermittedInView:
            pass

    def remove(self, element: Element) -> None:
        self._elements.pop(element.id, None)
        for rel_id, relationship in list(self._relationships.items()):
            if relationship.source is element or relationship.destination is element:
                del self._relationships[rel_id]

    def add_nearest_neighbours(self, element: Element, *types: type) -> None:
        """Add elements of the given types directly related to element."""
        for relationship in self.model.relationships:
            if relationship.source is element and isinstance(relationship.destination, types):
                self._try_add(relationship.destination)
            if relationship.destination is element and isinstance(relationship.source, types):
                self._try_add(relationship.source)

    def add_all_people(self) -> None:
        for person in self.model.people:
            self.add(person)

    def remove_relationships_not_connected_to_element(self, element: Element) -> None:
        for rel_id, relationship in list(self._relationships.items()):
            if relationship.source is not element and relationship.destination is not element:
                del self._relationships[rel_id]

    def remove_elements_with_no_relationships(self, *, keep: tuple[type, ...] = ()) -> None:
        connected: set[str] = set()
        for relationship in self._relationships.values():
            connected.add(relationship.source.id)
            connected.add(relationship.destination.id)
        for element in self.elements:
            if element.id in connected or (keep and isinstance(element, keep)):
                continue
            self.remove(element)

    def enable_automatic_layout(self, rank_direction: RankDirection) -> None:
        self.automatic_layout = AutomaticLayout(rank_direction)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"key": self.key, "description": self.description}
        out.update(self._scope_dict())
        if self.automatic_layout is not None:
            out["automaticLayout"] = self.automatic_layout.to_dict()
        out["elements"] = [{"id": e.id} for e in self._elements.values()]
        out["relationships"] = [{"id": r.id} for r in self._relationships.values()]
        return out

    def _scope_dict(self) -> dict[str, Any]:
        return {}


class SystemLandscapeView(StaticView):
    def _check_element_can_be_added(self, element: Element) -> None:
        if not isinstance(element, (Person, SoftwareSystem)):
            raise ElementNotPermittedInView(
                f"Only people and software systems can be added to landscape view {self.key!r}"
            )


class SystemContextView(StaticView):
    def __init__(
        self, model: Model, software_system: SoftwareSystem, key: str, description: str = ""
    ) -> None:
        super().__init__(model, key, description)
        self.software_system = software_system
        self.add(software_system)

    def _check_element_can_be_added(self, element: Element) -> None:
        if not isinstance(element, (Person, SoftwareSystem)):
            raise ElementNotPermittedInView(
                f"Only people and software systems can be added to context view {self.key!r}"
            )

    def add_default_elements(self) -> None:
        self.add_nearest_neighbours(self.software_system, Person)
        self.add_nearest_neighbours(self.software_system, SoftwareSystem)

    def _scope_dict(self) -> dict[str, Any]:
        return {"softwareSystemId": self.software_system.id}


class ContainerView(StaticView):
    def __init__(
        self, model: Model, software_system: SoftwareSystem, key: str, description: str = ""
    ) -> None:
        super().__init__(model, key, description)
        self.software_system = software_system

    def _check_element_can_be_added(self, element: Element) -> None:
        if isinstance(element, Person):
            return
        if isinstance(element, SoftwareSystem):
            if element is self.software_system:
                raise ElementNotPermittedInView(
                    f"{element.name!r} is the scope of container view {self.key!r}"
                )
            self._check_parent_and_children_not_added(element)
            return
        if isinstance(element, Container):
            self._check_parent_and_children_not_added(element)
            return
        raise ElementNotPermittedInView(
            f"Components cannot be added to container view {self.key!r}"
        )

    def add_default_elements(self) -> None:
        for container in self.software_system.containers:
            self.add(container)
            self.add_nearest_neighbours(container, Person)
            self.add_nearest_neighbours(container, SoftwareSystem)

    def _scope_dict(self) -> dict[str, Any]:
        return {"softwareSystemId": self.software_system.id}


class ComponentView(StaticView):
    def __init__(self, model: Model, container: Container, key: str, description: str = "") -> None:
        super().__init__(model, key, description)
        self.container = container

    def _check_element_can_be_added(self, element: Element) -> None:
        if element is self.container or element is self.container.parent:
            raise ElementNotPermittedInView(
                f"{element.name!r} is the scope of component view {self.key!r}"
            )
        if isinstance(element, Person):
            return
        self._check_parent_and_children_not_added(element)

    def add_default_elements(self) -> None:
        for component in self.container.components:
            self.add(component)
            self.add_nearest_neighbours(component, Person)
            self.add_nearest_neighbours(component, SoftwareSystem)
            self.add_nearest_neighbours(component, Container)
            self.add_nearest_neighbours(component, Component)

    def _scope_dict(self) -> dict[str, Any]:
        return {"containerId": self.container.id}


@dataclass(frozen=True)
class ElementStyle:
    tag: str
    shape: Optional[Shape] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tag": self.tag}
        if self.shape is not None:
            out["shape"] = self.shape.value
        if self.width is not None:
            out["width"] = self.width
        if self.height is not None:
            out["height"] = self.height
        return out


@dataclass
class Styles:
    elements: list[ElementStyle] = field(default_factory=list)

    def add_element_style(
        self,
        tag: str,
        shape: Optional[Shape] = None,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> ElementStyle:
        style = ElementStyle(tag=tag, shape=shape, width=width, height=height)
        self.elements.append(style)
        return style

    def find(self, tag: str) -> Optional[ElementStyle]:
        for style in self.elements:
            if style.tag == tag:
                return style
        return None


class ViewSet:
    def __init__(self, model: Model) -> None:
        self.model = model
        self.system_landscape_views: list[SystemLandscapeView] = []
        self.system_context_views: list[SystemContextView] = []
        self.container_views: list[ContainerView] = []
        self.component_views: list[ComponentView] = []
        self.styles = Styles()

    def _all(self) -> list[StaticView]:
        return [
            *self.system_landscape_views,
            *self.system_context_views,
            *self.container_views,
            *self.component_views,
        ]

    def get_view(self, key: str) -> Optional[StaticView]:
        for view in self._all():
            if view.key == key:
                return view
        return None

    def _require_unique_key(self, key: str) -> None:
        if not key or not key.strip():
            raise ValueError("A view key must be specified")
        if self.get_view(key) is not None:
            raise ValueError(f"A view with the key {key!r} already exists")

    def create_system_landscape_view(self, key: str, description: str = "") -> SystemLandscapeView:
        self._require_unique_key(key)
        view = SystemLandscapeView(self.model, key, description)
        self.system_landscape_views.append(view)
        return view

    def create_system_context_view(
        self, software_system: SoftwareSystem, key: str, description: str = ""
    ) -> SystemContextView:
        self._require_unique_key(key)
        view = SystemContextView(self.model, software_system, key, description)
        self.system_context_views.append(view)
        return view

    def create_container_view(
        self, software_system: SoftwareSystem, key: str, description: str = ""
    ) -> ContainerView:
        self._require_unique_key(key)
        view = ContainerView(self.model, software_system, key, description)
        self.container_views.append(view)
        return view

    def create_component_view(
        self, container: Container, key: str, description: str = ""
    ) -> ComponentView:
        self._require_unique_key(key)
        view = ComponentView(self.model, container, key, description)
        self.component_views.append(view)
        return view

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        sections = (
            ("systemLandscapeViews", self.system_landscape_views),
            ("systemContextViews", self.system_context_views),
            ("containerViews", self.container_views),
            ("componentViews", self.component_views),
        )
        for name, views in sections:
            if views:
                out[name] = [v.to_dict() for v in views]
        out["configuration"] = {
            "styles": {"elements": [s.to_dict() for s in self.styles.elements]}
        }
        return out
