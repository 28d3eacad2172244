"""
Pattern databases for pruning the iterative-deepening search.

Each database is the exact distance to solved of one projection of the cube,
found by breadth-first search from the solved state using all 18 moves:

- corner orientation: 3^7 = 2,187 entries
- corner permutation: 8!  = 40,320 entries
- edge orientation:   2^11 = 2,048 entries

A move sequence that solves the cube also solves every projection, so each
lookup is a lower bound on the remaining moves and so is their maximum.

The projections only read the corner/edge feature methods of RubiksCube, so the
same tables serve every representation.
"""

import time

import numpy as np

from cube import Move
from cube_1d_array import RubiksCube1dArray

FACTORIAL = [1, 1, 2, 6, 24, 120, 720, 5040, 40320]  # 0! to 8!

CORNER_ORIENTATION_STATES = 3 ** 7
CORNER_PERMUTATION_STATES = FACTORIAL[8]
EDGE_ORIENTATION_STATES = 2 ** 11


def _cubie_move_tables():
    """
    Corner and edge effect of each move, read off a solved cube.

    After move m on a solved cube, slot i holds the piece from slot perm[m][i]
    twisted by ori[m][i].
    """
    corner_perm, corner_ori, edge_perm, edge_ori = [], [], [], []
    for move in Move:
        cube = RubiksCube1dArray().move(move)
        corner_perm.append(tuple(cube.get_corner_index(i) for i in range(8)))
        corner_ori.append(tuple(cube.get_corner_orientation(i) for i in range(8)))
        edge_perm.append(tuple(cube.get_edge_index(i) for i in range(12)))
        edge_ori.append(tuple(cube.get_edge_orientation(i) for i in range(12)))
    return corner_perm, corner_ori, edge_perm, edge_ori


CORNER_PERM_MOVES, CORNER_ORI_MOVES, EDGE_PERM_MOVES, EDGE_ORI_MOVES = _cubie_move_tables()


def encode_corner_orientation(orientations):
    """
    Encode corner twists as an int in [0, 3^7).
    The 8th corner's twist is determined by the other 7.
    """
    code = 0
    for i in range(7):
        code = 3 * code + orientations[i]
    return code


def encode_corner_permutation(permutation):
    """Lehmer code of the corner permutation, an int in [0, 8!)."""
    code = 0
    for i in range(7):
        # Count how many elements to the right are smaller
        smaller = sum(1 for j in range(i + 1, 8) if permutation[j] < permutation[i])
        code += smaller * FACTORIAL[7 - i]
    return code


def encode_edge_orientation(orientations):
    """
    Encode edge flips as an int in [0, 2^11).
    The 12th edge's flip is determined by the other 11.
    """
    code = 0
    for i in range(11):
        code = (code << 1) | orientations[i]
    return code


def _corner_orientation_successors(orientations):
    for perm, ori in zip(CORNER_PERM_MOVES, CORNER_ORI_MOVES):
        yield tuple((orientations[perm[i]] + ori[i]) % 3 for i in range(8))


def _corner_permutation_successors(permutation):
    for perm in CORNER_PERM_MOVES:
        yield tuple(permutation[perm[i]] for i in range(8))


def _edge_orientation_successors(orientations):
    for perm, ori in zip(EDGE_PERM_MOVES, EDGE_ORI_MOVES):
        yield tuple((orientations[perm[i]] + ori[i]) % 2 for i in range(12))


def build_table(size, start, successors, encode, verbose=False):
    """
    Breadth-first search from start, storing each state's depth at its code.

    Returns:
        numpy int8 array of distances; -1 marks a code never reached
    """
    distances = {start: 0}
    frontier = [start]
    depth = 0
    while frontier:
        if verbose:
            print(f"  Depth {depth}: {len(frontier):,} states (total visited: {len(distances):,})")
        depth += 1
        next_frontier = []
        for state in frontier:
            for nxt in successors(state):
                if nxt not in distances:
                    distances[nxt] = depth
                    next_frontier.append(nxt)
        frontier = next_frontier

    table = np.full(size, -1, dtype=np.int8)
    for state, distance in distances.items():
        table[encode(state)] = distance
    table.setflags(write=False)
    return table


class PatternDatabases:
    """
    The three distance tables. Build once with PatternDatabases.load(); the
    instance is then read-only and can be shared by any number of solvers.
    """

    _instance = None

    def __init__(self, verbose=False):
        start_time = time.time()
        if verbose:
            print(f"Building corner orientation PDB ({CORNER_ORIENTATION_STATES:,} states)...")
        self.corner_orientation = build_table(
            CORNER_ORIENTATION_STATES, (0,) * 8,
            _corner_orientation_successors, encode_corner_orientation, verbose)

        if verbose:
            print(f"Building corner permutation PDB ({CORNER_PERMUTATION_STATES:,} states)...")
        self.corner_permutation = build_table(
            CORNER_PERMUTATION_STATES, tuple(range(8)),
            _corner_permutation_successors, encode_corner_permutation, verbose)

        if verbose:
            print(f"Building edge orientation PDB ({EDGE_ORIENTATION_STATES:,} states)...")
        self.edge_orientation = build_table(
            EDGE_ORIENTATION_STATES, (0,) * 12,
            _edge_orientation_successors, encode_edge_orientation, verbose)

        if verbose:
            print(f"Pattern databases ready in {time.time() - start_time:.2f}s")

    @classmethod
    def load(cls, verbose=False):
        """Lazy load the tables, building them on first use."""
        if cls._instance is None:
            cls._instance = cls(verbose=verbose)
        return cls._instance

    def lookup(self, cube):
        """Per-table lower bounds for cube, as (corner ori, corner perm, edge ori)."""
        corner_ori = [cube.get_corner_orientation(i) for i in range(8)]
        corner_perm = [cube.get_corner_index(i) for i in range(8)]
        edge_ori = [cube.get_edge_orientation(i) for i in range(12)]
        return (int(self.corner_orientation[encode_corner_orientation(corner_ori)]),
                int(self.corner_permutation[encode_corner_permutation(corner_perm)]),
                int(self.edge_orientation[encode_edge_orientation(edge_ori)]))


class PatternDatabaseHeuristic:
    """Admissible estimate of the moves left: the largest pattern database bound."""

    def __init__(self, databases=None, verbose=False):
        self.databases = databases or PatternDatabases.load(verbose=verbose)

    def __call__(self, cube):
        return max(self.databases.lookup(cube))
