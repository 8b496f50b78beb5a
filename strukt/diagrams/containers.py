from __future__ import annotations

from typing import Optional, Union

from ..c4.model import Container, SoftwareSystem
from ..c4.views import ComponentView, ContainerView, RankDirection, ViewSet
from ..constants import CONTAINER_VIEW_SUFFIX, SYNTHETIC_TAG


def flatten_synthetic_systems(view: Union[ContainerView, ComponentView]) -> None:
    """Replace every synthetic system in the view by its containers."""
    synthetic = [
        e for e in view.elements if isinstance(e, SoftwareSystem) and e.has_tag(SYNTHETIC_TAG)
    ]
    for system in synthetic:
        view.remove(system)
        for container in system.containers:
            view.add(container)


def gen_container_view(
    views: ViewSet, system: SoftwareSystem, direction: RankDirection
) -> Optional[ContainerView]:
    if not system.has_containers():
        return None

    view = views.create_container_view(
        system, f"{system.name}{CONTAINER_VIEW_SUFFIX}", system.description
    )
    view.add_default_elements()
    flatten_synthetic_systems(view)
    view.remove_elements_with_no_relationships()
    view.enable_automatic_layout(direction)
    return view


def gen_component_view(
    views: ViewSet, container: Container, direction: RankDirection
) -> Optional[ComponentView]:
    if not container.has_components():
        return None

    view = views.create_component_view(container, container.name, container.description)
    view.add_default_elements()
    flatten_synthetic_systems(view)
    view.remove_elements_with_no_relationships()
    view.enable_automatic_layout(direction)
    return view
