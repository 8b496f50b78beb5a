from __future__ import annotations

from ..c4.model import SoftwareSystem
from ..c4.views import RankDirection, SystemContextView, ViewSet


def gen_context_view(
    views: ViewSet, system: SoftwareSystem, direction: RankDirection
) -> SystemContextView:
    """System context: the system and the people/systems it talks to directly."""
    view = views.create_system_context_view(system, system.name, system.description)
    view.add_default_elements()
    view.remove_relationships_not_connected_to_element(system)
    view.remove_elements_with_no_relationships()
    view.enable_automatic_layout(direction)
    return view
