from __future__ import annotations

import json
from pathlib import Path

from .c4.workspace import Workspace


def write_json(path: Path, payload: dict) -> None:
    """Write a JSON document, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    path.write_text(content, encoding="utf-8")


def write_workspace_json(workspace: Workspace, path: Path) -> None:
    """Export the workspace (model + views + styles), overwriting path."""
    write_json(path, workspace.to_dict())
