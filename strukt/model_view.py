from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .constants import MODEL_SECTIONS, WORKSPACE_NAME_DEFAULT
from .graph import (
    Component,
    Container,
    ContainerKind,
    Interaction,
    Item,
    Person,
    System,
    Tag,
    TypeTag,
    Vertex,
)

Model = dict[str, Any]

TYPE_SYSTEM = "system"
TYPE_PERSON = "person"
TYPE_CONTAINER = "container"
TYPE_COMPONENT = "component"


@dataclass
class Graph:
    name: str = WORKSPACE_NAME_DEFAULT
    description: str = ""
    vertices: list[Vertex] = field(default_factory=list)
    items: dict[str, Item] = field(default_factory=dict)
    landscapes: dict[str, Tag] = field(default_factory=dict)

    def vertex(self, vertex_id: str) -> Optional[Vertex]:
        for v in self.vertices:
            if v.id == vertex_id:
                return v
        return None


def section(model: Model, name: str) -> list[dict[str, Any]]:
    """Mapping entries of a model section; anything else is skipped."""
    if name not in MODEL_SECTIONS:
        raise KeyError(f"unknown model section: {name!r}")
    items = model.get(name, []) or []
    if not isinstance(items, list):
        raise TypeError(f"model.{name} must be a list")
    return [i for i in items if isinstance(i, dict)]


def build_entity_index(model: Model, name: str) -> dict[str, dict[str, Any]]:
    """Index a section's entries by ID (first occurrence wins)."""
    index: dict[str, dict[str, Any]] = {}
    for entry in section(model, name):
        entity_id = entry.get("id")
        if isinstance(entity_id, str) and entity_id and entity_id not in index:
            index[entity_id] = entry
    return index


def type_names(entry: dict[str, Any]) -> list[str]:
    """Normalize `type:` (string or list) to lower-case names."""
    raw = entry.get("type", [])
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [t.strip().lower() for t in raw if isinstance(t, str) and t.strip()]


def _str(entry: dict[str, Any], key: str, default: str = "") -> str:
    val = entry.get(key)
    return val if isinstance(val, str) else default


def _ids(entry: dict[str, Any], key: str) -> list[str]:
    val = entry.get(key, []) or []
    if isinstance(val, str):
        val = [val]
    if not isinstance(val, list):
        return []
    return [v for v in val if isinstance(v, str) and v]


def _landscapes(entry: dict[str, Any], landscapes: dict[str, Tag]) -> tuple[Tag, ...]:
    return tuple(landscapes[i] for i in _ids(entry, "landscapes") if i in landscapes)


def _container_kind(entry: dict[str, Any]) -> Optional[ContainerKind]:
    kind = entry.get("kind")
    if not isinstance(kind, str) or not kind:
        return None
    for member in ContainerKind:
        if member.value.lower() == kind.strip().lower():
            return member
    raise ValueError(f"unknown container kind {kind!r}")


def _item_types(entry: dict[str, Any], landscapes: dict[str, Tag]) -> tuple[TypeTag, ...]:
    types: list[TypeTag] = []
    for name in type_names(entry):
        if name == TYPE_SYSTEM:
            types.append(System(landscapes=_landscapes(entry, landscapes)))
        else:
            types.append(name)
    return tuple(types)


def _vertex_types(
    entry: dict[str, Any], items: dict[str, Item], landscapes: dict[str, Tag]
) -> tuple[TypeTag, ...]:
    types: list[TypeTag] = []
    for name in type_names(entry):
        if name == TYPE_SYSTEM:
            types.append(System(landscapes=_landscapes(entry, landscapes)))
        elif name == TYPE_PERSON:
            types.append(Person())
        elif name == TYPE_CONTAINER:
            systems = tuple(items[i] for i in _ids(entry, "systems") if i in items)
            types.append(Container(kind=_container_kind(entry), systems=systems))
        elif name == TYPE_COMPONENT:
            types.append(Component())
        else:
            # Unknown types are kept; the engine ignores them.
            types.append(name)
    return tuple(types)


def build_graph(model: Model) -> Graph:
    """Resolve the YAML model into Tag/Item/Vertex objects.

    Dangling references are dropped here; run validate_model first to report
    them.
    """
    ws = model.get("workspace") or {}
    if not isinstance(ws, dict):
        raise TypeError("model.workspace must be a mapping")
    graph = Graph(
        name=_str(ws, "name", WORKSPACE_NAME_DEFAULT),
        description=_str(ws, "description"),
    )

    for entity_id, entry in build_entity_index(model, "landscapes").items():
        graph.landscapes[entity_id] = Tag(
            name=_str(entry, "name", entity_id), description=_str(entry, "description")
        )

    for entity_id, entry in build_entity_index(model, "items").items():
        graph.items[entity_id] = Item(
            name=_str(entry, "name", entity_id),
            description=_str(entry, "description"),
            types=_item_types(entry, graph.landscapes),
        )

    entries = build_entity_index(model, "vertices")
    by_id: dict[str, Vertex] = {}
    for entity_id, entry in entries.items():
        vertex = Vertex(
            name=_str(entry, "name", entity_id),
            summary=_str(entry, "summary", _str(entry, "description")),
            types=_vertex_types(entry, graph.items, graph.landscapes),
            id=entity_id,
        )
        by_id[entity_id] = vertex
        graph.vertices.append(vertex)

    # Second pass: links need every vertex to exist.
    for entity_id, entry in entries.items():
        vertex = by_id[entity_id]
        vertex.compose(*(by_id[i] for i in _ids(entry, "composed") if i in by_id))
        vertex.aggregate(*(by_id[i] for i in _ids(entry, "aggregated") if i in by_id))
        for edge in entry.get("edges", []) or []:
            if not isinstance(edge, dict):
                continue
            dst = by_id.get(_str(edge, "to"))
            if dst is not None:
                vertex.edges.append((Interaction(_str(edge, "summary")), dst))

    return graph
