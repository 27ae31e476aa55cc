import networkx as nx
import pytest

from gcp_graph import ColoringGraph


@pytest.fixture
def path3():
    # edges (1,2), (2,3) in 1-based ids
    return ColoringGraph.from_edges(3, [(0, 1), (1, 2)])


@pytest.fixture
def k4():
    return ColoringGraph.from_networkx(nx.complete_graph(4))


@pytest.fixture
def single_edge():
    return ColoringGraph.from_edges(2, [(0, 1)])


@pytest.fixture
def edgeless5():
    return ColoringGraph.from_edges(5, [])


@pytest.fixture
def petersen():
    return ColoringGraph.from_networkx(nx.petersen_graph())


@pytest.fixture
def random_graph():
    return ColoringGraph.from_networkx(nx.gnm_random_graph(40, 120, seed=3))
