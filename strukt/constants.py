# strukt/constants.py
from __future__ import annotations

from pathlib import Path

# Tag carried by software systems fabricated from items.
SYNTHETIC_TAG = "Synthetic"

DEFAULT_OUT_PATH = Path("doc") / "architecture.json"

CONTAINER_VIEW_SUFFIX = "-Containers"

# Default element/relationship tags of the diagram model.
TAG_ELEMENT = "Element"
TAG_PERSON = "Person"
TAG_SOFTWARE_SYSTEM = "Software System"
TAG_CONTAINER = "Container"
TAG_COMPONENT = "Component"
TAG_RELATIONSHIP = "Relationship"

QUEUE_SHAPE_WIDTH = 1200
QUEUE_SHAPE_HEIGHT = 200

# Split-model filenames (loaded in deterministic order).
MODEL_PART_FILES: tuple[str, ...] = (
    "00_workspace.yaml",
    "10_landscapes.yaml",
    "20_items.yaml",
    "30_vertices.yaml",
    # Further vertices are discovered under vertices/*.yaml
)

MODEL_SECTIONS: tuple[str, ...] = (
    "landscapes",
    "items",
    "vertices",
)

WORKSPACE_NAME_DEFAULT = "Architecture"
