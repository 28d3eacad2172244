import time
from abc import ABC, abstractmethod
from collections import deque

import kociemba as koc

from cube import Face, Move, MOVE_FACE, RubiksCube, parse_algorithm
from pattern_database import PatternDatabaseHeuristic

OPPOSITE_FACES = {
    Face.UP: Face.DOWN, Face.DOWN: Face.UP,
    Face.LEFT: Face.RIGHT, Face.RIGHT: Face.LEFT,
    Face.FRONT: Face.BACK, Face.BACK: Face.FRONT,
}


class SearchExhaustedError(RuntimeError):
    """Breadth-first search ran out of states without reaching solved."""


def is_redundant(move, previous):
    """
    True if move never needs to follow previous in a shortest solution.

    Two turns of the same face merge into one (or cancel), and turns of
    opposite faces commute, so those pairs are only searched in one order.
    """
    if previous is None:
        return False
    face, previous_face = MOVE_FACE[move], MOVE_FACE[previous]
    if face == previous_face:
        return True
    return OPPOSITE_FACES[face] == previous_face and face < previous_face


def format_moves(moves):
    return " ".join(RubiksCube.get_move(move) for move in moves)


def verify_solution(cube, moves):
    """Re-apply moves to a copy of cube and check that it ends up solved."""
    return cube.copy().apply_moves(moves).is_solved()


class CubeSolver(ABC):
    """
    Base class for the search strategies.

    Solvers only talk to the RubiksCube interface, so any representation can
    be solved. solve() works on a copy and never changes the cube passed in.
    """

    name = None

    def __init__(self, verbose=False):
        self.verbose = verbose
        self.nodes_expanded = 0

    def solve(self, cube):
        """
        Search for a move sequence that solves cube.

        Returns:
            success (bool), solution_moves (list of Move). An unsuccessful
            result from a depth-bounded solver is inconclusive: there may be
            a solution deeper than the bound.
        """
        self.nodes_expanded = 0
        start_time = time.time()
        success, solution_moves = self._search(cube.copy())

        if self.verbose:
            elapsed = time.time() - start_time
            if success:
                print(f"{self.name}: found {len(solution_moves)}-move solution "
                      f"after {self.nodes_expanded:,} nodes in {elapsed:.2f}s")
            else:
                print(f"{self.name}: no solution after {self.nodes_expanded:,} nodes "
                      f"in {elapsed:.2f}s")
        return success, solution_moves

    @abstractmethod
    def _search(self, cube):
        """Strategy body. May mutate cube, which is the solver's own copy."""


class BFSSolver(CubeSolver):
    """
    Breadth-first search from the scrambled state.

    Every queue entry owns its own copy of the cube. States are keyed by
    state_key() so each is expanded at most once, and the path is rebuilt
    from the parent links once solved is reached, so the solution is always
    the shortest one.
    """

    name = "BFS"

    def _search(self, cube):
        if cube.is_solved():
            return True, []

        start_key = cube.state_key()
        parents = {start_key: None}
        queue = deque([(cube, start_key, None, 0)])
        current_depth = -1

        while queue:
            state, state_key, last_move, depth = queue.popleft()
            if self.verbose and depth != current_depth:
                current_depth = depth
                print(f"  Depth {depth}: {len(queue) + 1:,} states queued "
                      f"(total visited: {len(parents):,})")
            self.nodes_expanded += 1

            for move in Move:
                # Same-face children were already reached one level up
                if last_move is not None and MOVE_FACE[move] == MOVE_FACE[last_move]:
                    continue
                child = state.copy().move(move)
                child_key = child.state_key()
                if child_key in parents:
                    continue
                parents[child_key] = (state_key, move)

                # The first solved state generated is at minimum depth
                if child.is_solved():
                    return True, self._rebuild_path(parents, child_key)
                queue.append((child, child_key, move, depth + 1))

        # Every state is reachable from every other, so this is a bug
        raise SearchExhaustedError(
            f"Breadth-first search visited {len(parents):,} states without reaching solved")

    @staticmethod
    def _rebuild_path(parents, key):
        moves = []
        while parents[key] is not None:
            key, move = parents[key]
            moves.append(move)
        moves.reverse()
        return moves


class DFSSolver(CubeSolver):
    """
    Depth-first search up to max_search_depth moves.

    Mutates a single cube and undoes each move with invert() before trying
    the next one. The first solution found is returned, which need not be the
    shortest. Finding nothing is inconclusive, not proof that no solution
    exists.
    """

    name = "DFS"

    def __init__(self, max_search_depth=5, heuristic=None, verbose=False):
        super().__init__(verbose=verbose)
        self.max_search_depth = max_search_depth
        self.heuristic = heuristic

    def _search(self, cube):
        path = []
        if self._dfs(cube, path, self.max_search_depth, None):
            return True, path
        return False, []

    def _dfs(self, cube, path, remaining, previous):
        self.nodes_expanded += 1
        if cube.is_solved():
            return True
        if remaining == 0:
            return False
        if self.heuristic is not None and self.heuristic(cube) > remaining:
            return False

        for move in Move:
            if is_redundant(move, previous):
                continue
            path.append(move)
            cube.move(move)
            found = self._dfs(cube, path, remaining - 1, move)
            cube.invert(move)
            if found:
                return True
            path.pop()
        return False


class IDDFSSolver(DFSSolver):
    """
    Iterative deepening: depth-first search with bound 0, 1, 2, ... up to
    max_search_depth.

    Memory stays proportional to the current depth, and since every shallower
    bound was exhausted first, the first solution found is a shortest one.
    An admissible heuristic (see pattern_database) prunes branches that cannot
    finish within the bound.
    """

    name = "IDDFS"

    def __init__(self, max_search_depth=20, heuristic=None, verbose=False):
        super().__init__(max_search_depth=max_search_depth, heuristic=heuristic, verbose=verbose)

    def _search(self, cube):
        for depth in range(self.max_search_depth + 1):
            if self.verbose:
                print(f"  Searching depth {depth} ({self.nodes_expanded:,} nodes so far)")
            path = []
            if self._dfs(cube, path, depth, None):
                return True, path
        return False, []


class KociembaSolver(CubeSolver):
    """
    Two-phase solver from the kociemba package.

    Solves any scramble in well under a second with about 20 moves, but the
    result is not guaranteed to be the shortest.
    """

    name = "Kociemba"

    def _search(self, cube):
        if cube.is_solved():
            return True, []
        self.nodes_expanded += 1
        solution = koc.solve(cube.to_kociemba_string())
        return True, parse_algorithm(solution)


SOLVERS = {
    "bfs": BFSSolver,
    "dfs": DFSSolver,
    "iddfs": IDDFSSolver,
    "kociemba": KociembaSolver,
}


def build_solver(name, max_search_depth=None, heuristic=False, verbose=False):
    """
    Create a solver by name.

    Args:
        name: one of SOLVERS
        max_search_depth: depth bound for dfs/iddfs (None = solver default)
        heuristic: prune dfs/iddfs with the pattern database heuristic
        verbose: print search progress
    """
    if name not in SOLVERS:
        raise ValueError(f"Unknown solver: {name}")
    solver_class = SOLVERS[name]
    if not issubclass(solver_class, DFSSolver):
        return solver_class(verbose=verbose)

    kwargs = {"verbose": verbose}
    if max_search_depth is not None:
        kwargs["max_search_depth"] = max_search_depth
    if heuristic:
        kwargs["heuristic"] = PatternDatabaseHeuristic(verbose=verbose)
    return solver_class(**kwargs)
