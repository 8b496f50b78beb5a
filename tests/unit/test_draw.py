import json
from pathlib import Path

from strukt.c4.model import InteractionStyle
from strukt.c4.views import Shape, Styles
from strukt.constants import SYNTHETIC_TAG
from strukt.draw import DrawConfig, build_workspace, draw
from strukt.styles import apply_styles

from conftest import component, container, person, system_item


def test_checkout_scenario(checkout_graph):
    ws = build_workspace(checkout_graph.values(), "Shop", "Shop architecture")

    (checkout,) = ws.model.software_systems
    assert checkout.name == "Checkout"
    (api,) = checkout.containers
    assert api.name == "API"
    assert api.has_tag("Service")
    assert [c.name for c in api.components] == ["Handler"]

    (customer,) = ws.model.people
    assert customer.name == "Customer"
    direct = [r for r in customer.relationships if r.destination is api]
    assert len(direct) == 1
    assert direct[0].description == "submits order"
    assert direct[0].interaction_style is InteractionStyle.SYNCHRONOUS

    context = ws.views.get_view("Checkout")
    assert {e.name for e in context.elements} == {"Checkout", "Customer"}
    containers = ws.views.get_view("Checkout-Containers")
    assert "API" in {e.name for e in containers.elements}
    components = ws.views.get_view("API")
    assert components.container is api


def test_worker_scenario(worker_graph):
    ws = build_workspace(worker_graph.values())

    (orders,) = ws.model.software_systems
    assert orders.name == "Orders"
    assert orders.has_tag(SYNTHETIC_TAG)
    assert [c.name for c in orders.containers] == ["Worker"]


def test_fan_out_container_gets_one_component_view():
    job = component("Job")
    worker = container("Worker", systems=(system_item("Beta"), system_item("Alpha"))).compose(job)
    ops = person("Ops").uses(job, "retries")

    ws = build_workspace([worker, job, ops])

    alpha, beta = ws.model.software_systems
    assert (alpha.name, beta.name) == ("Alpha", "Beta")
    assert [c.name for c in beta.containers[0].components] == ["Job"]
    (view,) = ws.views.component_views
    assert view.key == "Worker"
    assert view.container is alpha.containers[0]
    assert {e.name for e in view.elements} == {"Job", "Ops"}


def test_apply_styles():
    styles = Styles()
    apply_styles(styles)

    assert [s.to_dict() for s in styles.elements] == [
        {"tag": "Person", "shape": "Person"},
        {"tag": "Component", "shape": "RoundedBox"},
        {"tag": "Service", "shape": "Hexagon"},
        {"tag": "Storage", "shape": "Cylinder"},
        {"tag": "Queue", "shape": "Pipe", "width": 1200, "height": 200},
    ]
    assert styles.find("Queue").shape is Shape.PIPE
    assert styles.find("Missing") is None


def test_workspace_always_carries_styles(checkout_graph):
    ws = build_workspace(checkout_graph.values())
    assert len(ws.views.styles.elements) == 5


def test_default_output_path():
    assert DrawConfig().out_path == Path("doc") / "architecture.json"


def test_draw_writes_and_overwrites(tmp_path, checkout_graph, worker_graph):
    out = tmp_path / "doc" / "architecture.json"

    draw(checkout_graph.values(), DrawConfig(name="Shop", out_path=out))
    first = json.loads(out.read_text(encoding="utf-8"))
    assert first["name"] == "Shop"
    assert [s["name"] for s in first["model"]["softwareSystems"]] == ["Checkout"]
    assert first["views"]["configuration"]["styles"]["elements"][0]["tag"] == "Person"

    draw(worker_graph.values(), DrawConfig(name="Workers", out_path=out))
    second = json.loads(out.read_text(encoding="utf-8"))
    assert second["name"] == "Workers"
    assert second["model"]["softwareSystems"][0]["tags"] == "Element,Software System,Synthetic"
    assert "people" not in second["model"]


def test_draw_is_deterministic(tmp_path, checkout_graph, worker_graph):
    vertices = [*checkout_graph.values(), *worker_graph.values()]
    a, b = tmp_path / "a.json", tmp_path / "b.json"

    draw(vertices, DrawConfig(out_path=a))
    draw(list(reversed(vertices)), DrawConfig(out_path=b))

    assert a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")
