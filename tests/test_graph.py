import math

import pytest

from pathfinder.domain.errors import InvalidInputError, NodeNotFoundError, NoRouteFoundError
from pathfinder.domain.models import Coordinate, Edge, Node, Way
from pathfinder.geo.formulas import distance
from pathfinder.graph.builder import Graph, build_graph
from pathfinder.graph.dijkstra import shortest_path
from pathfinder.graph.locator import nearest_node
from pathfinder.graph.parser import parse_ways, ways_from_elements
from pathfinder.graph.route import route_between


def _node(node_id, lat, lon):
    return Node(id=node_id, coordinate=Coordinate(lat, lon))


# --- parser -----------------------------------------------------------------


def test_parse_single_way_into_nodes_and_edges(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0), (2, 0, 1), (3, 0, 2)])])

    assert [n.id for n in network.nodes] == [1, 2, 3]
    assert [(e.source, e.target) for e in network.edges] == [(1, 2), (2, 3)]
    assert network.one_way_flags == (False, False)
    assert network.edges[0].weight == pytest.approx(
        distance(Coordinate(0, 0), Coordinate(0, 1))
    )
    assert network.coordinates[3] == Coordinate(0, 2)


def test_parse_deduplicates_nodes_first_occurrence_wins(make_way):
    ways = [
        make_way(10, [(1, 0, 0), (2, 0, 1)]),
        make_way(11, [(2, 5, 5), (3, 0, 2)]),
    ]
    network = parse_ways(ways)

    assert [n.id for n in network.nodes] == [1, 2, 3]
    assert network.coordinates[2] == Coordinate(0, 1)
    assert network.edges[1].weight == pytest.approx(
        distance(Coordinate(0, 1), Coordinate(0, 2))
    )


def test_parse_single_node_way_has_no_edges(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0)])])
    assert len(network.nodes) == 1
    assert network.edges == ()


@pytest.mark.parametrize(
    "tags, expected",
    [
        ({"oneway": "yes"}, True),
        ({"oneway": "no"}, False),
        ({"oneway": "-1"}, False),
        ({"oneway": "YES"}, False),
        ({}, False),
    ],
)
def test_parse_tags_one_way_only_on_exact_yes(tags, expected):
    way = Way(
        id=1,
        node_ids=(1, 2),
        geometry=(Coordinate(0, 0), Coordinate(0, 1)),
        tags=tags,
    )
    assert parse_ways([way]).one_way_flags == (expected,)


def test_way_rejects_mismatched_geometry():
    with pytest.raises(InvalidInputError):
        Way(id=1, node_ids=(1, 2, 3), geometry=(Coordinate(0, 0),))


def test_ways_from_elements_skips_non_way_elements():
    payload = {
        "elements": [
            {"type": "node", "id": 5, "lat": 0, "lon": 0},
            {
                "type": "way",
                "id": 7,
                "nodes": [1, 2],
                "geometry": [{"lat": 0.0, "lon": 0.0}, {"lat": 0.0, "lon": 0.001}],
                "tags": {"highway": "primary", "oneway": "yes"},
            },
        ]
    }
    ways = ways_from_elements(payload)

    assert len(ways) == 1
    assert ways[0].node_ids == (1, 2)
    assert ways[0].one_way


def test_ways_from_elements_rejects_malformed_way():
    payload = {"elements": [{"type": "way", "id": 7, "nodes": [1, 2]}]}
    with pytest.raises(InvalidInputError):
        ways_from_elements(payload)


def test_ways_from_elements_requires_elements_list():
    with pytest.raises(InvalidInputError):
        ways_from_elements({"remark": "runtime error"})


# --- builder ----------------------------------------------------------------


def test_two_way_edge_inserted_in_both_directions():
    nodes = [_node(1, 0, 0), _node(2, 0, 1)]
    graph = build_graph(nodes, [Edge(1, 2, 42.0)], [False])

    assert graph.neighbors(1) == [(2, 42.0)]
    assert graph.neighbors(2) == [(1, 42.0)]


def test_one_way_edge_inserted_forward_only():
    nodes = [_node(1, 0, 0), _node(2, 0, 1)]
    graph = build_graph(nodes, [Edge(1, 2, 42.0)], [True])

    assert graph.has_edge(1, 2)
    assert not graph.has_edge(2, 1)


def test_isolated_node_is_kept():
    nodes = [_node(1, 0, 0), _node(2, 0, 1), _node(3, 1, 1)]
    graph = build_graph(nodes, [Edge(1, 2, 1.0)], [False])

    assert 3 in graph
    assert graph.neighbors(3) == []
    assert len(graph) == 3


def test_build_rejects_edge_to_unknown_node():
    with pytest.raises(InvalidInputError):
        build_graph([_node(1, 0, 0)], [Edge(1, 99, 1.0)], [False])


def test_build_rejects_flag_count_mismatch():
    nodes = [_node(1, 0, 0), _node(2, 0, 1)]
    with pytest.raises(InvalidInputError):
        build_graph(nodes, [Edge(1, 2, 1.0)], [])


def test_graph_add_edge_requires_registered_nodes():
    graph = Graph()
    graph.add_node(1)
    with pytest.raises(InvalidInputError):
        graph.add_edge(1, 2, 1.0)
    assert graph.neighbors(1) == []


def test_edge_rejects_negative_weight():
    with pytest.raises(InvalidInputError):
        Edge(1, 2, -1.0)


# --- locator ----------------------------------------------------------------


def test_nearest_node_picks_closest():
    nodes = [_node(1, 0, 0), _node(2, 0, 0.01), _node(3, 0, 0.02)]
    node, d = nearest_node(Coordinate(0, 0.011), nodes)

    assert node.id == 2
    assert d == pytest.approx(distance(Coordinate(0, 0.011), Coordinate(0, 0.01)))


def test_nearest_node_tie_goes_to_first():
    nodes = [_node(1, 0, -0.01), _node(2, 0, 0.01)]
    node, _ = nearest_node(Coordinate(0, 0), nodes)
    assert node.id == 1


def test_nearest_node_empty_region_fails():
    with pytest.raises(NodeNotFoundError):
        nearest_node(Coordinate(0, 0), [])


# --- dijkstra ---------------------------------------------------------------


def _coords(nodes):
    return {n.id: n.coordinate for n in nodes}


def test_shortest_path_single_node_source_is_target():
    nodes = [_node(1, 0, 0)]
    graph = build_graph(nodes, [], [])
    result = shortest_path(graph, 1, 1, _coords(nodes))

    assert result.node_ids == (1,)
    assert result.coordinates == (Coordinate(0, 0),)
    assert result.distance_m == 0.0


def test_shortest_path_disconnected_is_unreachable():
    nodes = [_node(1, 0, 0), _node(2, 0, 1), _node(3, 1, 0), _node(4, 1, 1)]
    graph = build_graph(nodes, [Edge(1, 2, 1.0), Edge(3, 4, 1.0)], [False, False])
    result = shortest_path(graph, 1, 4, _coords(nodes))

    assert not result.is_reachable
    assert result.node_ids == ()
    assert result.coordinates == ()
    assert math.isinf(result.distance_m)


def test_shortest_path_prefers_cheaper_detour():
    nodes = [_node(1, 0, 0), _node(2, 0, 1), _node(3, 0, 2)]
    edges = [Edge(1, 3, 10.0), Edge(1, 2, 3.0), Edge(2, 3, 4.0)]
    graph = build_graph(nodes, edges, [True, True, True])
    result = shortest_path(graph, 1, 3, _coords(nodes))

    assert result.node_ids == (1, 2, 3)
    assert result.distance_m == pytest.approx(7.0)


def test_shortest_path_respects_one_way():
    nodes = [_node(1, 0, 0), _node(2, 0, 1)]
    graph = build_graph(nodes, [Edge(1, 2, 5.0)], [True])

    assert shortest_path(graph, 1, 2, _coords(nodes)).is_reachable
    assert not shortest_path(graph, 2, 1, _coords(nodes)).is_reachable


def test_shortest_path_unknown_node_fails():
    nodes = [_node(1, 0, 0)]
    graph = build_graph(nodes, [], [])
    with pytest.raises(NodeNotFoundError):
        shortest_path(graph, 1, 2, _coords(nodes))


def test_shortest_path_triangle_inequality(make_way):
    ways = [
        make_way(1, [(1, 0, 0), (2, 0, 0.01), (3, 0.01, 0.01)]),
        make_way(2, [(1, 0, 0), (4, 0.01, 0.0), (3, 0.01, 0.01)]),
        make_way(3, [(2, 0, 0.01), (4, 0.01, 0.0)], oneway=True),
    ]
    network = parse_ways(ways)
    graph = build_graph(network.nodes, network.edges, network.one_way_flags)

    def d(a, b):
        return shortest_path(graph, a, b, network.coordinates).distance_m

    for a, b, c in [(1, 2, 3), (2, 4, 3), (4, 1, 2), (3, 2, 4)]:
        assert d(a, c) <= d(a, b) + d(b, c) + 1e-9


# --- end to end -------------------------------------------------------------


def test_route_between_follows_way(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0), (2, 0, 1), (3, 0, 2)])])
    result = route_between(network, Coordinate(0, 0), Coordinate(0, 2))

    expected = distance(Coordinate(0, 0), Coordinate(0, 1)) + distance(
        Coordinate(0, 1), Coordinate(0, 2)
    )
    assert result.node_ids == (1, 2, 3)
    assert result.coordinates == (Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 2))
    assert result.distance_m == pytest.approx(expected)


def test_route_between_snaps_off_road_coordinates(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0), (2, 0, 0.01), (3, 0, 0.02)])])
    result = route_between(network, Coordinate(0.0005, 0.0001), Coordinate(-0.0004, 0.0199))
    assert result.node_ids == (1, 2, 3)


def test_route_between_empty_network_fails():
    network = parse_ways([])
    with pytest.raises(NodeNotFoundError):
        route_between(network, Coordinate(0, 0), Coordinate(0, 1))


def test_route_between_unreachable_returns_empty_result(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0), (2, 0, 0.01)], oneway=True)])
    result = route_between(network, Coordinate(0, 0.01), Coordinate(0, 0))
    assert not result.is_reachable


def test_route_between_required_route_reports_snapped_nodes(make_way):
    network = parse_ways([make_way(10, [(1, 0, 0), (2, 0, 0.01)], oneway=True)])

    with pytest.raises(NoRouteFoundError) as excinfo:
        route_between(network, Coordinate(0, 0.0099), Coordinate(0, 0.0001), require_route=True)

    assert excinfo.value.source == 2
    assert excinfo.value.target == 1
