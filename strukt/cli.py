# strukt/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .c4.views import RankDirection
from .constants import DEFAULT_OUT_PATH
from .draw import DrawConfig, draw
from .io import load_model
from .model_view import build_graph
from .validate import validate_model


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Draw C4 architecture views from a YAML vertex graph."
    )
    parser.add_argument(
        "--model",
        type=Path,
        required=True,
        help="Path to a split model directory or a single YAML file.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=DEFAULT_OUT_PATH,
        help=f"Output workspace JSON (default: {DEFAULT_OUT_PATH})",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Workspace name (default: model.workspace.name)",
    )
    parser.add_argument(
        "--description",
        type=str,
        default=None,
        help="Workspace description (default: model.workspace.description)",
    )
    parser.add_argument(
        "--rank-direction",
        type=str,
        choices=[d.value for d in RankDirection],
        default=RankDirection.LEFT_RIGHT.value,
        help="Automatic layout rank direction for every view.",
    )
    parser.add_argument(
        "--no-implied",
        action="store_true",
        help="Do not lift relationships to parent elements.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on validation warnings (e.g., edges to unknown vertices). Errors always fail.",
    )

    args = parser.parse_args(argv)

    model = load_model(args.model)

    errors, warnings = validate_model(model)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    graph = build_graph(model)
    cfg = DrawConfig(
        name=args.name if args.name is not None else graph.name,
        description=args.description if args.description is not None else graph.description,
        out_path=args.out,
        rank_direction=RankDirection(args.rank_direction),
        implied_relationships=not args.no_implied,
    )
    draw(graph.vertices, cfg)


if __name__ == "__main__":
    main()
