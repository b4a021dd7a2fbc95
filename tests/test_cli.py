"""Tests for the command line entry point."""

import json

import networkx as nx
import pytest

from pauling import __version__
from pauling.cli import main, read_graph_json


def _write_graph(tmp_path, G, edges="links"):
    path = tmp_path / "mol.json"
    path.write_text(json.dumps(nx.node_link_data(G, edges=edges)))
    return str(path)


def _benzene_graph(bond_order=1.5):
    G = nx.Graph()
    for i in range(6):
        G.add_node(i, symbol="C")
    for i in range(6):
        G.add_edge(i, (i + 1) % 6, bond_order=bond_order)
        G.add_node(6 + i, symbol="H")
        G.add_edge(i, 6 + i, bond_order=1.0)
    return G


@pytest.fixture
def benzene_json(tmp_path):
    return _write_graph(tmp_path, _benzene_graph())


def test_version(capsys):
    assert main(["--version"]) == 0
    assert f"pauling v{__version__}" in capsys.readouterr().out


def test_requires_graph():
    with pytest.raises(SystemExit):
        main([])


@pytest.mark.parametrize("edges", ["links", "edges"])
def test_read_graph_json_either_key(tmp_path, edges):
    G = read_graph_json(_write_graph(tmp_path, _benzene_graph(), edges=edges))
    assert G.number_of_nodes() == 12
    assert G.edges[0, 1]["bond_order"] == 1.5


def test_summary_output(benzene_json, capsys):
    assert main([benzene_json]) == 0
    out = capsys.readouterr().out
    assert "mol.json (12 atoms, 12 bonds)" in out
    assert "# 1 resonance system(s)" in out
    assert "6 atoms, 6 bonds" in out


def test_json_output(benzene_json, capsys):
    assert main([benzene_json, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    (system,) = data["systems"]
    assert system["atoms"] == [0, 1, 2, 3, 4, 5]
    assert len(system["bonds"]) == 6


def test_debug_output(benzene_json, capsys):
    assert main([benzene_json, "-d", "-H"]) == 0
    out = capsys.readouterr().out
    assert "KEKULIZATION" in out
    assert "# Rings (SSSR)" in out


def test_non_default_params_in_header(benzene_json, capsys):
    assert main([benzene_json, "--max-attempts", "50", "--keep-aryl-links"]) == 0
    out = capsys.readouterr().out
    assert "max_attempts=50" in out
    assert "split_aryl_links=False" in out


def test_invalid_max_attempts(benzene_json, capsys):
    assert main([benzene_json, "--max-attempts", "0"]) == 2
    assert "max_attempts" in capsys.readouterr().err


def test_perception_error_exit_code(tmp_path, capsys):
    G = nx.Graph()
    for i in range(5):
        G.add_node(i, symbol="C")
        G.add_edge(i, (i + 1) % 5, bond_order=1.5)
    for i in range(5):
        G.add_node(5 + i, symbol="H")
        G.add_edge(i, 5 + i)
    assert main([_write_graph(tmp_path, G)]) == 1
    assert "kekulization failed" in capsys.readouterr().err
