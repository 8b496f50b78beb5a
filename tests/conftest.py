"""
Shared graph builders for the strukt tests.

The graphs are small, hand-assembled Vertex sets; nothing touches the
filesystem except the exporter/CLI tests (which use tmp_path).
"""
from __future__ import annotations

import pytest

from strukt.graph import (
    Component,
    Container,
    ContainerKind,
    Item,
    Person,
    System,
    Tag,
    Vertex,
)


def system(name: str, summary: str = "", landscapes: tuple[Tag, ...] = ()) -> Vertex:
    return Vertex(name, summary, types=(System(landscapes=landscapes),), id=name.lower())


def person(name: str, summary: str = "") -> Vertex:
    return Vertex(name, summary, types=(Person(),), id=name.lower())


def container(
    name: str,
    kind: ContainerKind | None = None,
    systems: tuple[Item, ...] = (),
    summary: str = "",
) -> Vertex:
    return Vertex(
        name, summary, types=(Container(kind=kind, systems=systems),), id=name.lower()
    )


def component(name: str, summary: str = "") -> Vertex:
    return Vertex(name, summary, types=(Component(),), id=name.lower())


def system_item(name: str, description: str = "", landscapes: tuple[Tag, ...] = ()) -> Item:
    return Item(name, description, types=(System(landscapes=landscapes),))


@pytest.fixture
def checkout_graph() -> dict[str, Vertex]:
    """Checkout system > API (Service) > Handler, plus Customer -> API."""
    handler = component("Handler", "Handles orders")
    api = container("API", ContainerKind.SERVICE, summary="Order API").compose(handler)
    checkout = system("Checkout", "Takes orders").compose(api)
    customer = person("Customer", "Buys things").uses(api, "submits order")
    return {"Checkout": checkout, "API": api, "Handler": handler, "Customer": customer}


@pytest.fixture
def orders_item() -> Item:
    return system_item("Orders", "Order processing")


@pytest.fixture
def worker_graph(orders_item: Item) -> dict[str, Vertex]:
    """A Worker container whose parent system exists only as an Item."""
    worker = container("Worker", ContainerKind.QUEUE, systems=(orders_item,))
    return {"Worker": worker}
