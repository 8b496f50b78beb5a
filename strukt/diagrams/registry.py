from __future__ import annotations

from ..c4.views import RankDirection, StaticView, ViewSet
from ..hierarchy import DrawContext
from .containers import gen_component_view, gen_container_view
from .context import gen_context_view
from .landscape import gen_landscape_view


def derive_views(
    views: ViewSet,
    ctx: DrawContext,
    direction: RankDirection = RankDirection.LEFT_RIGHT,
) -> list[StaticView]:
    """Create every view for the populated model.

    Must run after all elements and relationships exist; pruning works on the
    final relationship graph.
    """
    created: list[StaticView] = []
    # Fanned-out copies of a container share its name; only the mapped copy
    # carries relationships, so only it gets a component view.
    mapped = {id(e) for e in ctx.elements.values()}
    for system in ctx.software_systems:
        created.append(gen_context_view(views, system, direction))
        container_view = gen_container_view(views, system, direction)
        if container_view is not None:
            created.append(container_view)
        for container in system.containers:
            if id(container) not in mapped:
                continue
            component_view = gen_component_view(views, container, direction)
            if component_view is not None:
                created.append(component_view)

    for landscape, systems in ctx.landscapes.items():
        created.append(gen_landscape_view(views, landscape, systems, direction))
    return created
