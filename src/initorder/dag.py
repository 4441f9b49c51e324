# dag.py
from __future__ import annotations

import heapq
from typing import Dict, List, Sequence, Set, Tuple

from .errors import DependencyCycle, DuplicateUnitName, LoadFailure, MissingDependency
from .model import UnitFile


def build_graph(units: Sequence[UnitFile]) -> Tuple[List[Set[int]], List[int]]:
    """
    Build the ordering graph from unit records.

    Nodes are positions in `units`. An edge u -> v means u must come
    before v:
      - name in u.needs_before  -> edge u -> name
      - name in u.needs_after   -> edge name -> u

    Raises:
      DuplicateUnitName  if two units share a name
      LoadFailure        wrapping MissingDependency for the first unknown name
    """
    index: Dict[str, int] = {}
    for i, unit in enumerate(units):
        if unit.name in index:
            raise DuplicateUnitName(unit.name)
        index[unit.name] = i

    adj: List[Set[int]] = [set() for _ in units]
    indeg: List[int] = [0 for _ in units]

    def add_edge(src: int, dst: int) -> None:
        # repeated declarations of the same constraint collapse to one edge
        if dst not in adj[src]:
            adj[src].add(dst)
            indeg[dst] += 1

    for i, unit in enumerate(units):
        for dep in unit.dependency.needs_before:
            add_edge(i, _lookup(index, unit, dep))
        for dep in unit.dependency.needs_after:
            add_edge(_lookup(index, unit, dep), i)

    return adj, indeg


def _lookup(index: Dict[str, int], unit: UnitFile, dep: str) -> int:
    try:
        return index[dep]
    except KeyError:
        err = MissingDependency(unit.name, dep)
    raise LoadFailure(err) from err


def topo_order(
    adj: List[Set[int]],
    indeg: List[int],
    names: Sequence[str],
) -> List[int]:
    """
    Kahn's algorithm. Among nodes that are ready at the same time the one
    with the lowest index goes first, so the result only depends on input.
    """
    indeg = list(indeg)  # copy (we mutate it)
    ready = [n for n, d in enumerate(indeg) if d == 0]
    heapq.heapify(ready)

    order: List[int] = []
    while ready:
        node = heapq.heappop(ready)
        order.append(node)
        for child in adj[node]:
            indeg[child] -= 1
            if indeg[child] == 0:
                heapq.heappush(ready, child)

    if len(order) != len(indeg):
        raise _cycle_error(adj, indeg, names)

    return order


def topo_levels(
    adj: List[Set[int]],
    indeg: List[int],
    names: Sequence[str],
) -> List[List[int]]:
    """
    Convert the graph into topological "levels" (stages).
    Every node in a stage only has predecessors in earlier stages.
    """
    indeg = list(indeg)
    level = [n for n, d in enumerate(indeg) if d == 0]

    levels: List[List[int]] = []
    processed = 0

    while level:
        levels.append(level)
        processed += len(level)

        nxt: List[int] = []
        for node in level:
            for child in adj[node]:
                indeg[child] -= 1
                if indeg[child] == 0:
                    nxt.append(child)
        level = sorted(nxt)

    if processed != len(indeg):
        raise _cycle_error(adj, indeg, names)

    return levels


def _cycle_error(adj: List[Set[int]], indeg: List[int], names: Sequence[str]) -> DependencyCycle:
    """
    Pick a node that is actually on a cycle.

    After Kahn's algorithm stalls, every node left with indeg > 0 still has
    at least one unprocessed predecessor. Walking predecessors from any of
    them must revisit a node, and the revisited stretch is a cycle.
    """
    stuck = {n for n, d in enumerate(indeg) if d > 0}
    preds: Dict[int, List[int]] = {n: [] for n in stuck}
    for src in sorted(stuck):
        for dst in adj[src]:
            if dst in stuck:
                preds[dst].append(src)

    path: List[int] = []
    seen: Dict[int, int] = {}
    node = min(stuck)
    while node not in seen:
        seen[node] = len(path)
        path.append(node)
        node = min(preds[node])

    loop = path[seen[node]:]
    loop.reverse()  # walked against the edges
    cycle = [names[n] for n in loop]
    cycle.append(cycle[0])
    return DependencyCycle(unit=cycle[0], cycle=tuple(cycle))


def resolve(units: Sequence[UnitFile]) -> List[UnitFile]:
    """
    Order units so every before/after constraint holds.

    Returns the same records, reordered. Unconstrained units keep their
    input order. Raises ResolutionError (DuplicateUnitName, LoadFailure,
    DependencyCycle); there are no partial results.
    """
    units = list(units)
    adj, indeg = build_graph(units)
    order = topo_order(adj, indeg, [u.name for u in units])
    return [units[i] for i in order]


def resolve_levels(units: Sequence[UnitFile]) -> List[List[UnitFile]]:
    """Like resolve(), but grouped into stages that could start together."""
    units = list(units)
    adj, indeg = build_graph(units)
    levels = topo_levels(adj, indeg, [u.name for u in units])
    return [[units[i] for i in level] for level in levels]
