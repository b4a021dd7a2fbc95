import argparse
import json
import logging
import os
import sys

import networkx as nx

from . import (
    NetworkXGraph,
    PerceptionConfig,
    PerceptionError,
    ResonancePerceiver,
    perception_report,
    result_to_dict,
    __version__,
)
from .parameters import DEFAULT_PARAMS


def print_header(input_file, G, params_used):
    """Print the input file, its size and any non-default parameters."""
    print(f"# pauling v{__version__}: {os.path.basename(input_file)} "
          f"({G.number_of_nodes()} atoms, {G.number_of_edges()} bonds)")
    if params_used:
        print("# parameters: " + ", ".join(f"{k}={v}" for k, v in params_used.items()))
    print()


def read_graph_json(path):
    """Load a networkx node-link JSON file (``links`` or ``edges`` key)."""
    with open(path) as fh:
        data = json.load(fh)
    edges = "edges" if "edges" in data else "links"
    return nx.node_link_graph(data, edges=edges)


def main(argv=None):
    p = argparse.ArgumentParser(description="Perceive rings, aromaticity and resonance systems of a molecular graph.")
    p.add_argument("graph", nargs='?',
                   help="Input graph as networkx node-link JSON (node 'symbol'/'formal_charge', edge 'bond_order')")
    p.add_argument("--version", action="store_true",
                   help="Print version and exit")

    p.add_argument("--max-attempts", type=int, default=DEFAULT_PARAMS['max_attempts'],
                   help=f"Kekulé search attempts per aromatic component (default: {DEFAULT_PARAMS['max_attempts']})")
    p.add_argument("--keep-aryl-links", action="store_true", default=not DEFAULT_PARAMS['split_aryl_links'],
                   help="Let single bonds between aromatic rings join their resonance systems")

    p.add_argument("--json", action="store_true",
                   help="Print the perceived graph as JSON instead of text")
    p.add_argument("-d", "--debug", action="store_true",
                   help="Print the stage log and the full per-atom report")
    p.add_argument("-H", "--show-h", action="store_true",
                   help="Include C–H hydrogens in the report")
    args = p.parse_args(argv)

    if args.version:
        print(f"pauling v{__version__}")
        return 0

    if not args.graph:
        p.error("the following arguments are required: graph")

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    params = {
        'max_attempts': args.max_attempts,
        'split_aryl_links': not args.keep_aryl_links,
    }
    params_used = {k: v for k, v in params.items() if v != DEFAULT_PARAMS[k]}

    try:
        config = PerceptionConfig.from_params(params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    G = read_graph_json(args.graph)
    perceiver = ResonancePerceiver(config)
    try:
        result = perceiver.run(NetworkXGraph(G))
    except PerceptionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
        return 0

    print_header(args.graph, G, params_used)

    if args.debug:
        print("\n".join(perceiver.get_log()))
        print()
        print(perception_report(result, include_h=args.show_h))
        return 0

    print(f"# {len(result.systems)} resonance system(s)")
    for s_idx, system in enumerate(result.systems):
        atoms = " ".join(f"{result.atom(a).element}{a}" for a in system.atoms)
        print(f"  [{s_idx}] {len(system.atoms)} atoms, {len(system.bonds)} bonds: {atoms}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
