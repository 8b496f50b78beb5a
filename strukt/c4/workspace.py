# strukt/c4/workspace.py
from __future__ import annotations

from typing import Any

from .model import Model
from .views import ViewSet


class Workspace:
    """A model plus the views drawn from it; serializes to workspace JSON."""

    def __init__(self, name: str, description: str = "", *, implied_relationships: bool = True) -> None:
        self.name = name
        self.description = description or ""
        self.model = Model(implied_relationships=implied_relationships)
        self.views = ViewSet(self.model)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "model": self.model.to_dict(),
            "views": self.views.to_dict(),
        }
