# strukt/relationships.py
from __future__ import annotations

import logging
from typing import Optional

from .c4.model import Element, ElementKind, InteractionStyle
from .graph import Vertex
from .hierarchy import DrawContext

logger = logging.getLogger(__name__)


def interaction_style(source: ElementKind, destination: ElementKind) -> Optional[InteractionStyle]:
    """Style for a replayed edge.

    Only static -> custom (e.g. a system answering a person) keeps the
    implicit default style.
    """
    if source is ElementKind.STATIC and destination is ElementKind.CUSTOM:
        return None
    return InteractionStyle.SYNCHRONOUS


def propagate_relationships(ctx: DrawContext) -> int:
    """Replay every vertex edge onto the mapped elements; returns the count added."""
    added = 0
    mapped: list[tuple[Element, Vertex]] = sorted(
        ((element, vertex) for vertex, element in ctx.elements.items()),
        key=lambda pair: int(pair[0].id),
    )
    for source, vertex in mapped:
        for interaction, destination in vertex.edges:
            target = ctx.elements.get(destination)
            if target is None:
                logger.debug("skipping edge %r -> %r: destination not drawn", vertex, destination)
                continue
            relationship = source.uses(
                target,
                interaction.summary,
                interaction_style=interaction_style(source.kind, target.kind),
            )
            if relationship is not None:
                added += 1
    return added
