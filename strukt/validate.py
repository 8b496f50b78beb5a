# strukt/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Tuple

from .constants import MODEL_SECTIONS
from .graph import ContainerKind
from .model_view import TYPE_CONTAINER, TYPE_SYSTEM, type_names

Severity = Literal["error", "warning"]

CONTAINER_KINDS = {k.value.lower() for k in ContainerKind}


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)


def _as_id_list(val: object) -> Optional[list[Any]]:
    if val is None:
        return []
    if isinstance(val, str):
        return [val]
    if isinstance(val, list):
        return val
    return None


def validate_model_issues(
    model: dict[str, Any], cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a YAML graph model.

    Only problems the graph loader cannot resolve are errors. Edge targets that
    do not exist are warnings because drawing skips them anyway.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    ws = model.get("workspace")
    if ws is not None and not isinstance(ws, dict):
        emit("error", "E_WORKSPACE_NOT_MAPPING", "model.workspace must be a mapping")

    ids: dict[str, dict[str, dict[str, Any]]] = {}
    # (section, id) -> index in the section list, for issue paths.
    positions: dict[tuple[str, str], int] = {}
    for section in MODEL_SECTIONS:
        ids[section] = {}
        entries = model.get(section, []) or []
        if not isinstance(entries, list):
            emit(
                "error",
                "E_SECTION_NOT_LIST",
                f"model.{section} must be a list",
                path=f"/{section}",
            )
            continue

        for j, entry in enumerate(entries):
            if not isinstance(entry, dict):
                emit(
                    "warning",
                    "W_SECTION_ITEM_NOT_MAPPING",
                    f"model.{section} contains a non-mapping item; skipping",
                    path=f"/{section}/{j}",
                )
                continue

            entity_id = entry.get("id")
            if not isinstance(entity_id, str) or not entity_id:
                emit(
                    "error",
                    "E_ENTITY_MISSING_ID",
                    f"model.{section} item missing string `id`",
                    path=f"/{section}/{j}/id",
                )
                continue

            if entity_id in ids[section]:
                emit(
                    "error",
                    "E_ENTITY_DUPLICATE_ID",
                    f"duplicate id {entity_id!r} in {section}",
                    path=f"/{section}/{j}/id",
                )
                continue
            ids[section][entity_id] = entry
            positions[(section, entity_id)] = j

    landscape_ids = ids["landscapes"]
    item_ids = ids["items"]
    vertex_ids = ids["vertices"]

    def check_landscapes(section: str, j: int, entity_id: str, entry: dict[str, Any]) -> None:
        refs = _as_id_list(entry.get("landscapes"))
        if refs is None:
            emit(
                "error",
                "E_LANDSCAPES_NOT_LIST",
                f"{entity_id!r} landscapes must be a list of ids",
                path=f"/{section}/{j}/landscapes",
            )
            return
        for ref in refs:
            if not isinstance(ref, str) or ref not in landscape_ids:
                emit(
                    "error",
                    "E_LANDSCAPE_UNKNOWN",
                    f"{entity_id!r} references undeclared landscape {ref!r}",
                    path=f"/{section}/{j}/landscapes",
                )

    for item_id, item in item_ids.items():
        j = positions[("items", item_id)]
        if TYPE_SYSTEM in type_names(item):
            check_landscapes("items", j, item_id, item)

    for vertex_id, vertex in vertex_ids.items():
        j = positions[("vertices", vertex_id)]
        types = type_names(vertex)
        if not types:
            emit(
                "warning",
                "W_VERTEX_UNTYPED",
                f"vertex {vertex_id!r} has no type; it will not be drawn",
                path=f"/vertices/{j}/type",
            )

        if TYPE_SYSTEM in types:
            check_landscapes("vertices", j, vertex_id, vertex)

        if TYPE_CONTAINER in types:
            kind = vertex.get("kind")
            if kind is not None and (
                not isinstance(kind, str) or kind.strip().lower() not in CONTAINER_KINDS
            ):
                emit(
                    "error",
                    "E_CONTAINER_KIND_UNKNOWN",
                    f"container {vertex_id!r} has unknown kind {kind!r}",
                    path=f"/vertices/{j}/kind",
                    hint="Use one of: " + ", ".join(k.value for k in ContainerKind),
                )

            systems = _as_id_list(vertex.get("systems"))
            for ref in systems or []:
                if not isinstance(ref, str) or ref not in item_ids:
                    emit(
                        "error",
                        "E_CONTAINER_SYSTEM_UNKNOWN",
                        f"container {vertex_id!r} references undeclared item {ref!r}",
                        path=f"/vertices/{j}/systems",
                    )
                elif TYPE_SYSTEM not in type_names(item_ids[ref]):
                    emit(
                        "warning",
                        "W_CONTAINER_SYSTEM_NOT_SYSTEM",
                        f"container {vertex_id!r} references item {ref!r} that is not a system",
                        path=f"/vertices/{j}/systems",
                    )

        for key in ("composed", "aggregated"):
            refs = _as_id_list(vertex.get(key))
            if refs is None:
                emit(
                    "error",
                    "E_CHILDREN_NOT_LIST",
                    f"vertex {vertex_id!r} {key} must be a list of ids",
                    path=f"/vertices/{j}/{key}",
                )
                continue
            for ref in refs:
                if not isinstance(ref, str) or ref not in vertex_ids:
                    emit(
                        "error",
                        "E_CHILD_UNKNOWN_VERTEX",
                        f"vertex {vertex_id!r} {key} references unknown vertex {ref!r}",
                        path=f"/vertices/{j}/{key}",
                    )

        edges = vertex.get("edges", []) or []
        if not isinstance(edges, list):
            emit(
                "error",
                "E_EDGES_NOT_LIST",
                f"vertex {vertex_id!r} edges must be a list",
                path=f"/vertices/{j}/edges",
            )
            continue
        for k, edge in enumerate(edges):
            if not isinstance(edge, dict):
                emit(
                    "warning",
                    "W_EDGE_NOT_MAPPING",
                    f"vertex {vertex_id!r} contains a non-mapping edge; skipping",
                    path=f"/vertices/{j}/edges/{k}",
                )
                continue
            dst = edge.get("to")
            if not isinstance(dst, str) or dst not in vertex_ids:
                emit(
                    "warning",
                    "W_EDGE_TO_UNKNOWN_VERTEX",
                    f"edge from {vertex_id!r} references unknown vertex {dst!r}",
                    path=f"/vertices/{j}/edges/{k}/to",
                )

    return issues


def validate_model(model: dict[str, Any]) -> Tuple[list[str], list[str]]:
    """Perform lightweight structural validation before drawing."""
    issues = validate_model_issues(model)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
