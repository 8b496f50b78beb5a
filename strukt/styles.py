from __future__ import annotations

from .c4.views import Shape, Styles
from .constants import QUEUE_SHAPE_HEIGHT, QUEUE_SHAPE_WIDTH, TAG_COMPONENT, TAG_PERSON
from .graph import ContainerKind


def apply_styles(styles: Styles) -> None:
    """Register the fixed element shapes (by tag) used by every view."""
    styles.add_element_style(TAG_PERSON, Shape.PERSON)
    styles.add_element_style(TAG_COMPONENT, Shape.ROUNDED_BOX)
    styles.add_element_style(ContainerKind.SERVICE.value, Shape.HEXAGON)
    styles.add_element_style(ContainerKind.STORAGE.value, Shape.CYLINDER)
    styles.add_element_style(
        ContainerKind.QUEUE.value,
        Shape.PIPE,
        width=QUEUE_SHAPE_WIDTH,
        height=QUEUE_SHAPE_HEIGHT,
    )
