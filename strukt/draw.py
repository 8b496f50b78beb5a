# strukt/draw.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .c4.views import RankDirection
from .c4.workspace import Workspace
from .constants import DEFAULT_OUT_PATH, WORKSPACE_NAME_DEFAULT
from .diagrams.registry import derive_views
from .graph import Vertex
from .hierarchy import DrawContext, build_hierarchy, synthesize_systems
from .relationships import propagate_relationships
from .styles import apply_styles
from .writer import write_workspace_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawConfig:
    name: str = WORKSPACE_NAME_DEFAULT
    description: str = ""
    out_path: Path = DEFAULT_OUT_PATH
    rank_direction: RankDirection = RankDirection.LEFT_RIGHT
    implied_relationships: bool = True


def build_workspace(
    vertices: Iterable[Vertex],
    name: str = WORKSPACE_NAME_DEFAULT,
    description: str = "",
    *,
    rank_direction: RankDirection = RankDirection.LEFT_RIGHT,
    implied_relationships: bool = True,
) -> Workspace:
    """Project the vertex graph onto a C4 workspace (model, views, styles)."""
    workspace = Workspace(name, description, implied_relationships=implied_relationships)
    ctx = DrawContext(model=workspace.model)

    build_hierarchy(ctx, vertices)
    synthesize_systems(ctx)
    added = propagate_relationships(ctx)
    views = derive_views(workspace.views, ctx, rank_direction)
    apply_styles(workspace.views.styles)

    logger.debug(
        "workspace %r: %d element(s), %d relationship(s) from edges, %d view(s)",
        name,
        len(workspace.model.elements),
        added,
        len(views),
    )
    return workspace


def draw(vertices: Iterable[Vertex], cfg: DrawConfig = DrawConfig()) -> Workspace:
    """Build the workspace and export it to cfg.out_path."""
    workspace = build_workspace(
        vertices,
        cfg.name,
        cfg.description,
        rank_direction=cfg.rank_direction,
        implied_relationships=cfg.implied_relationships,
    )
    write_workspace_json(workspace, Path(cfg.out_path))
    return workspace
