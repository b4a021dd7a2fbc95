"""Tests for graph ingestion and validation."""

import networkx as nx
import pytest

from molecules import RawGraph, benzene
from pauling.context import build_context
from pauling.exceptions import DuplicateBond, InconsistentGraph, PerceptionError
from pauling.graph import NetworkXGraph
from pauling.model import BondOrder, Hybridization


def test_index_maps_and_adjacency():
    ctx = build_context(benzene())
    assert ctx.num_atoms == 12
    assert ctx.num_bonds == 12
    assert ctx.atom_index == {i: i for i in range(12)}
    assert ctx.bond_index == {i: i for i in range(12)}
    assert sorted(ctx.neighbors(0)) == [1, 5, 6]
    assert ctx.bond_between(0, 1).index == 0
    assert ctx.bond_between(0, 3) is None


def test_default_metadata():
    ctx = build_context(benzene())
    atom = ctx.atoms[0]
    assert atom.degree == 3
    assert atom.hybridization is Hybridization.UNKNOWN
    assert not atom.is_aromatic and not atom.is_candidate
    assert all(b.kekule_order is None for b in ctx.bonds)
    assert ctx.rings == []


def test_networkx_graph_mirrors_bonds():
    ctx = build_context(benzene())
    assert ctx.graph.number_of_nodes() == 12
    assert ctx.graph.edges[0, 1]["index"] == 0
    assert ctx.graph.edges[5, 0]["index"] == 5


def test_external_ids_are_kept():
    G = nx.Graph()
    G.add_node("c1", symbol="c")
    G.add_node("o1", symbol=8)
    G.add_edge("c1", "o1", bond_order=2)
    ctx = build_context(NetworkXGraph(G))
    assert [a.element for a in ctx.atoms] == ["C", "O"]
    assert ctx.atom_index == {"c1": 0, "o1": 1}
    assert ctx.bonds[0].id == ("c1", "o1")
    assert ctx.bonds[0].order is BondOrder.DOUBLE


def test_unknown_atom_reference():
    graph = RawGraph([(0, "C"), (1, "C")], [(0, 0, 1), (1, 1, 7)])
    with pytest.raises(InconsistentGraph) as exc:
        build_context(graph)
    assert exc.value.atom_id == 7
    assert exc.value.bond_id == 1


def test_duplicate_bond_reversed_pair():
    graph = RawGraph([(0, "C"), (1, "C")], [("a", 0, 1), ("b", 1, 0)])
    with pytest.raises(DuplicateBond) as exc:
        build_context(graph)
    assert (exc.value.begin, exc.value.end, exc.value.bond_id) == (1, 0, "b")


@pytest.mark.parametrize(
    "atoms, bonds, match",
    [
        ([(0, "C"), (0, "O")], [], "duplicate atom id"),
        ([(0, "C"), (1, "Zz")], [], "unknown element"),
        ([(0, "C"), (1, "C")], [(0, 0, 0)], "itself"),
        ([(0, "C"), (1, "C"), (2, "C")], [(0, 0, 1), (0, 1, 2)], "duplicate bond id"),
        ([(0, "C"), (1, "C")], [(0, 0, 1, 2.5)], "bond order"),
    ],
)
def test_other_inconsistencies(atoms, bonds, match):
    with pytest.raises(InconsistentGraph, match=match):
        build_context(RawGraph(atoms, bonds))


def test_errors_share_base_class():
    assert issubclass(InconsistentGraph, PerceptionError)
    assert issubclass(DuplicateBond, PerceptionError)
