import networkx as nx
import pytest

from gcp_graph import ColoringGraph


def test_from_edges_builds_symmetric_adjacency():
    g = ColoringGraph.from_edges(4, [(0, 1), (1, 2), (2, 3)])
    assert g.vertex_count() == 4
    assert len(g) == 4
    assert g.edge_count() == 3
    assert sorted(g.neighbors(1)) == [0, 2]
    assert g.neighbors(3) == (2,)
    for u in range(4):
        for w in g.neighbors(u):
            assert u in g.neighbors(w)


def test_parallel_edges_and_self_loops_are_kept():
    g = ColoringGraph.from_edges(3, [(0, 1), (0, 1), (2, 2)])
    assert g.neighbors(0) == (1, 1)
    assert g.neighbors(2) == (2, 2)
    assert g.edge_count() == 3


def test_csr_arrays_match_neighbor_lists():
    g = ColoringGraph.from_edges(3, [(0, 1), (1, 2)])
    assert g.indptr.tolist() == [0, 1, 3, 4]
    assert g.indices.tolist() == [1, 0, 2, 1]
    assert g.sources.tolist() == [0, 1, 1, 2]
    with pytest.raises(ValueError):
        g.indices[0] = 2


def test_asymmetric_adjacency_rejected():
    with pytest.raises(ValueError, match="symmetric"):
        ColoringGraph([[1], []])


def test_out_of_range_neighbor_rejected():
    with pytest.raises(ValueError, match="out-of-range"):
        ColoringGraph([[3], [0]])
    with pytest.raises(ValueError):
        ColoringGraph.from_edges(2, [(0, 2)])


def test_palette_clamped_to_vertex_count():
    g = ColoringGraph.from_edges(3, [(0, 1)])
    assert g.palette_size(100) == 3
    assert g.palette_size(2) == 2


def test_from_networkx_relabels_and_keeps_multi_edges():
    mg = nx.MultiGraph()
    mg.add_nodes_from(["a", "b", "c"])
    mg.add_edge("a", "b")
    mg.add_edge("a", "b")
    mg.add_edge("c", "c")
    g = ColoringGraph.from_networkx(mg)
    assert g.neighbors(0) == (1, 1)
    assert g.neighbors(2) == (2, 2)

    back = g.to_networkx()
    assert back.number_of_nodes() == 3
    assert back.number_of_edges(0, 1) == 2
    assert back.number_of_edges(2, 2) == 1


def test_from_networkx_rejects_directed():
    with pytest.raises(ValueError):
        ColoringGraph.from_networkx(nx.DiGraph([(0, 1)]))


def test_empty_graph():
    g = ColoringGraph([])
    assert g.vertex_count() == 0
    assert g.edge_count() == 0
    assert g.palette_size(5) == 0
