from __future__ import annotations

from typing import Callable, Iterable, Tuple

import pytest

from pathfinder.config import reset_config
from pathfinder.domain.models import Coordinate, Way

NodeSpec = Tuple[int, float, float]


def build_way(way_id: int, nodes: Iterable[NodeSpec], oneway: bool = False) -> Way:
    nodes = list(nodes)
    return Way(
        id=way_id,
        node_ids=tuple(n for n, _, _ in nodes),
        geometry=tuple(Coordinate(lat, lon) for _, lat, lon in nodes),
        tags={"highway": "residential", **({"oneway": "yes"} if oneway else {})},
    )


@pytest.fixture
def make_way() -> Callable[..., Way]:
    return build_way


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()
