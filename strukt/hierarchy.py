# strukt/hierarchy.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .c4.model import Container as ContainerElement
from .c4.model import Element, Model, SoftwareSystem
from .constants import SYNTHETIC_TAG
from .graph import Component, Container, Item, Person, System, Tag, Vertex

logger = logging.getLogger(__name__)


class VertexClass(Enum):
    SYSTEM = "system"
    PERSON = "person"
    CONTAINER = "container"
    IGNORED = "ignored"


def classify(vertex: Vertex) -> VertexClass:
    """Top-level classification; System wins over Person over Container."""
    if vertex.has_type(System):
        return VertexClass.SYSTEM
    if vertex.has_type(Person):
        return VertexClass.PERSON
    if vertex.has_type(Container):
        return VertexClass.CONTAINER
    return VertexClass.IGNORED


@dataclass
class DrawContext:
    """Mutable state of one draw pass.

    Filled by build_hierarchy/synthesize_systems/propagate_relationships and
    only read by the view derivers.
    """

    model: Model
    elements: dict[Vertex, Element] = field(default_factory=dict)
    landscapes: dict[Tag, list[SoftwareSystem]] = field(default_factory=dict)
    deferred: dict[Item, list[Vertex]] = field(default_factory=dict)
    # Real systems by name, so items naming them adopt containers instead.
    systems_by_name: dict[str, SoftwareSystem] = field(default_factory=dict)

    def map(self, vertex: Vertex, element: Element) -> None:
        # First mapping wins.
        self.elements.setdefault(vertex, element)

    def register_landscapes(self, system: SoftwareSystem, landscapes: Iterable[Tag]) -> None:
        for landscape in landscapes:
            self.landscapes.setdefault(landscape, []).append(system)

    @property
    def software_systems(self) -> list[SoftwareSystem]:
        return list(self.model.software_systems)


def _vertex_order(vertex: Vertex) -> tuple[str, str]:
    return vertex.name, vertex.id


def _children(vertex: Vertex) -> list[Vertex]:
    """Composed and aggregated children as one set, in first-seen order."""
    return list(dict.fromkeys((*vertex.composed, *vertex.aggregated)))


def _add_container(ctx: DrawContext, system: SoftwareSystem, vertex: Vertex) -> ContainerElement:
    container = system.add_container(vertex.name, vertex.summary)
    tag = vertex.as_type(Container)
    if tag is not None and tag.kind is not None:
        container.add_tags(tag.kind.value)
    # Components are elevated through composition only.
    for composite in dict.fromkeys(vertex.composed):
        if composite.has_type(Component):
            ctx.map(composite, container.add_component(composite.name, composite.summary))
    ctx.map(vertex, container)
    return container


def _nested_containers(vertices: Iterable[Vertex]) -> set[Vertex]:
    nested: set[Vertex] = set()
    for vertex in vertices:
        if classify(vertex) is not VertexClass.SYSTEM:
            continue
        for inner in _children(vertex):
            if inner.has_type(Container):
                nested.add(inner)
    return nested


def build_hierarchy(ctx: DrawContext, vertices: Iterable[Vertex]) -> None:
    """Create systems, containers, components and people for the vertex set."""
    ordered = sorted(vertices, key=_vertex_order)
    nested = _nested_containers(ordered)
    adopted: list[tuple[SoftwareSystem, Vertex]] = []
    deferred_containers: list[Vertex] = []

    for vertex in ordered:
        vclass = classify(vertex)
        if vclass is VertexClass.SYSTEM:
            system = ctx.model.add_software_system(vertex.name, vertex.summary)
            ctx.systems_by_name[system.name] = system
            for inner in _children(vertex):
                if inner.has_type(Container):
                    _add_container(ctx, system, inner)
            ctx.map(vertex, system)
            tag = vertex.as_type(System)
            ctx.register_landscapes(system, tag.landscapes if tag else ())
        elif vclass is VertexClass.PERSON:
            ctx.map(vertex, ctx.model.add_person(vertex.name, vertex.summary))
        elif vclass is VertexClass.CONTAINER:
            if vertex not in nested:
                deferred_containers.append(vertex)
        else:
            logger.debug("ignoring unclassified vertex %r", vertex)

    # Items are resolved after every real system exists, so the result does
    # not depend on vertex order.
    for vertex in deferred_containers:
        tag = vertex.as_type(Container)
        for item in tag.systems if tag else ():
            if not item.has_type(System):
                continue
            real = ctx.systems_by_name.get(item.name)
            if real is not None:
                adopted.append((real, vertex))
            else:
                ctx.deferred.setdefault(item, []).append(vertex)

    for system, vertex in adopted:
        _add_container(ctx, system, vertex)


def _item_landscapes(item: Item) -> tuple[Tag, ...]:
    tag = item.as_type(System)
    return tag.landscapes if tag else ()


def synthesize_systems(ctx: DrawContext) -> list[SoftwareSystem]:
    """Fabricate a Synthetic system per deferred item holding its containers."""
    created: list[SoftwareSystem] = []
    for item in sorted(ctx.deferred, key=lambda i: (i.name, i.description)):
        system = ctx.model.add_software_system(item.name, item.description)
        system.add_tags(SYNTHETIC_TAG)
        for vertex in ctx.deferred[item]:
            _add_container(ctx, system, vertex)
        ctx.register_landscapes(system, _item_landscapes(item))
        logger.debug(
            "synthesized system %r for %d container(s)", system.name, len(ctx.deferred[item])
        )
        created.append(system)
    return created
