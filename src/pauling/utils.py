from typing import Any, Dict, List

import networkx as nx

from .context import PerceptionContext
from .pipeline import PerceptionResult


def _visible_atoms(ctx: PerceptionContext, include_h: bool) -> List[int]:
    """Dense indices of the perceived atoms the report lists.

    Without ``include_h``, a hydrogen is dropped when every neighbour is a
    carbon; N-H, O-H and other heteroatom hydrogens stay in the listing.
    """
    if include_h:
        return list(range(ctx.num_atoms))
    keep = []
    for atom in ctx.atoms:
        if atom.element != "H":
            keep.append(atom.index)
            continue
        nbrs = ctx.neighbors(atom.index)
        if nbrs and all(ctx.atoms[n].element == "C" for n in nbrs):
            continue
        keep.append(atom.index)
    return keep


def _order_label(bond) -> str:
    label = bond.order.name.lower()
    if bond.kekule_order is not None and bond.kekule_order is not bond.order:
        label += f"->{bond.kekule_order.name.lower()}"
    return label


# -----------------------------
# Debug (tabular) representation
# -----------------------------


def perception_report(result: PerceptionResult, include_h: bool = False) -> str:
    """
    Debug listing of a perception run (optionally hides C–H hydrogens).
    Valence shown is the full valence (including hidden H contributions).
    """
    ctx = result.context
    lines = []
    lines.append(
        f"# Perceived graph: {ctx.num_atoms} atoms, {ctx.num_bonds} bonds, "
        f"{len(ctx.rings)} rings, {len(result.systems)} resonance systems"
    )
    if not include_h:
        lines.append("# (C–H hydrogens hidden; heteroatom-bound hydrogens shown; valences still include all H)")
    lines.append("# [idx] Sym  val=.. chg=.. lp=.. hyb | roles | neighbors: idx(order / aromatic flag)")

    visible = set(_visible_atoms(ctx, include_h))
    for atom in ctx.atoms:
        if atom.index not in visible:
            continue
        nbrs = []
        for nbr, bond_idx in sorted(ctx.adjacency[atom.index]):
            if nbr not in visible:
                continue
            bond = ctx.bonds[bond_idx]
            arom = "*" if bond.is_aromatic else ""
            nbrs.append(f"{nbr}({bond.effective_order.multiplicity}{arom})")
        flags = ""
        if atom.radical_electrons:
            flags += " rad"
        if atom.valence_anomaly:
            flags += " !val"
        roles = ",".join(atom.roles.labels()) or "-"
        lines.append(
            f"[{atom.index:>3}] {atom.element:>2}  val={atom.total_valence}  chg={atom.formal_charge:+d}  "
            f"lp={atom.lone_pairs}  {atom.hybridization.value:<5}{flags} | {roles} | "
            + (" ".join(nbrs) if nbrs else "-")
        )

    lines.append("")
    lines.append("# Bonds (i-j: order) (filtered)")
    if ctx.bonds:
        idx_width = max(2, len(str(ctx.num_atoms - 1)))
        for bond in ctx.bonds:
            i, j = sorted((bond.begin, bond.end))
            if i in visible and j in visible:
                arom = " aromatic" if bond.is_aromatic else ""
                lines.append(f"[{i:>{idx_width}}-{j:>{idx_width}}]: {_order_label(bond)}{arom}")

    lines.append("")
    lines.append("# Rings (SSSR)")
    for r_idx, ring in enumerate(ctx.rings):
        lines.append(f"  {r_idx}: " + " ".join(f"{ctx.atoms[i].element}{i}" for i in ring.atoms))

    lines.append("")
    lines.append("# Resonance systems (atom ids | bond ids)")
    for s_idx, system in enumerate(result.systems):
        lines.append(f"  {s_idx}: {list(system.atoms)} | {list(system.bonds)}")
    return "\n".join(lines)


# -----------------------------
# Export
# -----------------------------


def result_to_graph(result: PerceptionResult) -> nx.Graph:
    """
    Enriched networkx graph keyed by dense atom index.
    Node and edge attributes carry the perceived state; ``system`` is the
    index of the resonance system an atom/bond belongs to (or None).
    """
    ctx = result.context
    atom_system: Dict[int, int] = {}
    bond_system: Dict[int, int] = {}
    for s_idx, system in enumerate(result.systems):
        for atom_id in system.atoms:
            atom_system[ctx.atom_index[atom_id]] = s_idx
        for bond_id in system.bonds:
            bond_system[ctx.bond_index[bond_id]] = s_idx

    G = nx.Graph()
    G.graph["rings"] = [list(ring.atoms) for ring in ctx.rings]
    G.graph["num_resonance_systems"] = len(result.systems)
    for atom in ctx.atoms:
        G.add_node(
            atom.index,
            id=atom.id,
            symbol=atom.element,
            formal_charge=atom.formal_charge,
            valence=atom.total_valence,
            lone_pairs=atom.lone_pairs,
            radical_electrons=atom.radical_electrons,
            hybridization=atom.hybridization.value,
            is_in_ring=atom.is_in_ring,
            aromatic=atom.is_aromatic,
            roles=list(atom.roles.labels()),
            system=atom_system.get(atom.index),
        )
    for bond in ctx.bonds:
        G.add_edge(
            bond.begin,
            bond.end,
            id=bond.id,
            bond_order=bond.order.value_float,
            kekule_order=bond.kekule_order.value_float if bond.kekule_order is not None else None,
            is_in_ring=bond.is_in_ring,
            aromatic=bond.is_aromatic,
            system=bond_system.get(bond.index),
        )
    return G


def result_to_dict(result: PerceptionResult) -> Dict[str, Any]:
    """JSON-serialisable summary of a perception run, keyed by dense indices."""
    ctx = result.context
    index_systems = [
        {
            "atoms": [ctx.atom_index[a] for a in system.atoms],
            "bonds": [ctx.bond_index[b] for b in system.bonds],
        }
        for system in result.systems
    ]
    return {
        "atoms": [
            {
                "index": atom.index,
                "symbol": atom.element,
                "formal_charge": atom.formal_charge,
                "valence": atom.total_valence,
                "lone_pairs": atom.lone_pairs,
                "radical_electrons": atom.radical_electrons,
                "valence_anomaly": atom.valence_anomaly,
                "hybridization": atom.hybridization.value,
                "aromatic": atom.is_aromatic,
                "roles": list(atom.roles.labels()),
                "candidate": atom.is_candidate,
            }
            for atom in ctx.atoms
        ],
        "bonds": [
            {
                "index": bond.index,
                "atoms": [bond.begin, bond.end],
                "order": bond.order.value,
                "kekule_order": bond.kekule_order.value if bond.kekule_order is not None else None,
                "aromatic": bond.is_aromatic,
                "in_ring": bond.is_in_ring,
            }
            for bond in ctx.bonds
        ],
        "rings": [list(ring.atoms) for ring in ctx.rings],
        "systems": index_systems,
    }
