import json
from pathlib import Path

import pytest

from strukt.draw import DrawConfig, draw
from strukt.io import load_model
from strukt.model_view import build_graph

MODEL_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "models" / "shop"


@pytest.fixture
def shop_doc(tmp_path) -> dict:
    graph = build_graph(load_model(MODEL_DIR))
    out = tmp_path / "doc" / "architecture.json"
    draw(graph.vertices, DrawConfig(name=graph.name, description=graph.description, out_path=out))
    return json.loads(out.read_text(encoding="utf-8"))


def _names_by_id(doc: dict) -> dict[str, str]:
    names: dict[str, str] = {}
    for person in doc["model"].get("people", []):
        names[person["id"]] = person["name"]
    for system in doc["model"].get("softwareSystems", []):
        names[system["id"]] = system["name"]
        for container in system.get("containers", []):
            names[container["id"]] = container["name"]
            for component in container.get("components", []):
                names[component["id"]] = component["name"]
    return names


def _view(doc: dict, section: str, key: str) -> dict:
    (view,) = [v for v in doc["views"].get(section, []) if v["key"] == key]
    return view


def _view_names(doc: dict, view: dict) -> set[str]:
    names = _names_by_id(doc)
    return {names[e["id"]] for e in view["elements"]}


@pytest.mark.integration
def test_shop_model_hierarchy(shop_doc):
    systems = {s["name"]: s for s in shop_doc["model"]["softwareSystems"]}
    assert set(systems) == {"Checkout", "Orders"}

    checkout = systems["Checkout"]
    containers = {c["name"]: c for c in checkout["containers"]}
    assert set(containers) == {"API", "Cache"}
    assert containers["API"]["tags"] == "Element,Container,Service"
    assert containers["Cache"]["tags"] == "Element,Container,Storage"
    # Audit is aggregated, so it is not drawn.
    assert [c["name"] for c in containers["API"]["components"]] == ["Handler"]

    orders = systems["Orders"]
    assert "Synthetic" in orders["tags"].split(",")
    assert [c["name"] for c in orders["containers"]] == ["Events", "Worker"]

    assert {p["name"] for p in shop_doc["model"]["people"]} == {"Clerk", "Customer"}


@pytest.mark.integration
def test_shop_model_relationship_styles(shop_doc):
    names = _names_by_id(shop_doc)
    orders = [s for s in shop_doc["model"]["softwareSystems"] if s["name"] == "Orders"][0]
    worker = [c for c in orders["containers"] if c["name"] == "Worker"][0]

    by_target = {names[r["destinationId"]]: r for r in worker["relationships"]}
    assert by_target["Events"]["interactionStyle"] == "Synchronous"
    assert "interactionStyle" not in by_target["Customer"]
    assert by_target["Customer"]["description"] == "emails confirmation"


@pytest.mark.integration
def test_shop_model_views(shop_doc):
    views = shop_doc["views"]
    assert [v["key"] for v in views["systemContextViews"]] == ["Checkout", "Orders"]
    assert [v["key"] for v in views["containerViews"]] == [
        "Checkout-Containers",
        "Orders-Containers",
    ]
    assert [v["key"] for v in views["componentViews"]] == ["API"]
    assert [v["key"] for v in views["systemLandscapeViews"]] == ["Retail"]

    assert _view_names(shop_doc, _view(shop_doc, "systemContextViews", "Checkout")) == {
        "Checkout",
        "Customer",
        "Orders",
    }
    assert _view_names(shop_doc, _view(shop_doc, "containerViews", "Checkout-Containers")) == {
        "API",
        "Cache",
        "Customer",
        "Events",
        "Worker",
    }
    assert _view_names(shop_doc, _view(shop_doc, "componentViews", "API")) == {
        "Handler",
        "Customer",
    }
    assert _view_names(shop_doc, _view(shop_doc, "systemLandscapeViews", "Retail")) == {
        "Checkout",
        "Orders",
        "Clerk",
        "Customer",
    }

    for view in [*views["systemContextViews"], *views["containerViews"], *views["componentViews"]]:
        assert view["automaticLayout"]["rankDirection"] == "LeftRight"


@pytest.mark.integration
def test_shop_model_views_never_show_synthetic_boxes_below_context(shop_doc):
    synthetic_ids = {
        s["id"]
        for s in shop_doc["model"]["softwareSystems"]
        if "Synthetic" in s["tags"].split(",")
    }
    for section in ("containerViews", "componentViews"):
        for view in shop_doc["views"][section]:
            assert not synthetic_ids & {e["id"] for e in view["elements"]}
