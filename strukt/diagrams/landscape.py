from __future__ import annotations

from typing import Iterable

from ..c4.model import Person, SoftwareSystem
from ..c4.views import RankDirection, SystemLandscapeView, ViewSet
from ..graph import Tag


def gen_landscape_view(
    views: ViewSet,
    landscape: Tag,
    systems: Iterable[SoftwareSystem],
    direction: RankDirection,
) -> SystemLandscapeView:
    """Landscape: every system registered under the tag plus all people.

    People stay in the view even when they have no relationship in it.
    """
    view = views.create_system_landscape_view(landscape.name, landscape.description)
    for system in systems:
        view.add(system)
    view.add_all_people()
    view.remove_elements_with_no_relationships(keep=(Person,))
    view.enable_automatic_layout(direction)
    return view
