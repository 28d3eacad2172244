import argparse
import random
import sys
import time

from cube import Move, parse_algorithm
from cube_1d_array import RubiksCube1dArray
from cube_3d_array import RubiksCube3dArray
from cube_bitboard import RubiksCubeBitboard
from solvers import SOLVERS, build_solver, format_moves, verify_solution

REPRESENTATIONS = {
    "3d": RubiksCube3dArray,
    "1d": RubiksCube1dArray,
    "bitboard": RubiksCubeBitboard,
}


def generate_scramble(representation, num_moves, rng=None):
    """
    Scramble a solved cube with num_moves random moves.

    Returns:
        tuple: (cube, scramble_moves)
    """
    cube = REPRESENTATIONS[representation]()
    scramble_moves = cube.random_shuffle(num_moves, rng)
    return cube, scramble_moves


def run_benchmark(num_moves, rng=None):
    """
    Apply the same random moves to every representation and time each one.

    Returns:
        timings (dict of name -> seconds), consistent (bool: all ended in the same state)
    """
    rng = rng or random.Random()
    moves = [Move(rng.randrange(len(Move))) for _ in range(num_moves)]

    print(f"=== Benchmarking {num_moves:,} moves per representation ===")
    timings = {}
    keys = set()
    for name, cube_class in REPRESENTATIONS.items():
        cube = cube_class()
        start_time = time.time()
        cube.apply_moves(moves)
        timings[name] = time.time() - start_time
        keys.add(cube.state_key())
        print(f"{name:>9}: {timings[name]:.4f}s "
              f"({num_moves / max(timings[name], 1e-9):,.0f} moves/s)")

    consistent = len(keys) == 1
    if not consistent:
        print("Representations disagree on the final state!")
    return timings, consistent


def main(argv=None):
    parser = argparse.ArgumentParser(description="Scramble a Rubik's cube and solve it by search")
    parser.add_argument("--representation", choices=sorted(REPRESENTATIONS), default="bitboard",
                        help="Cube state encoding")
    parser.add_argument("--solver", choices=sorted(SOLVERS), default="iddfs",
                        help="Search strategy")
    parser.add_argument("--scramble", type=str,
                        help="Scramble in move notation, e.g. \"R U F'\" (default: random)")
    parser.add_argument("--scramble-moves", type=int, default=4,
                        help="Number of random scramble moves")
    parser.add_argument("--max-depth", type=int,
                        help="Depth bound for dfs/iddfs")
    parser.add_argument("--heuristic", action="store_true",
                        help="Prune dfs/iddfs with the pattern database heuristic")
    parser.add_argument("--seed", type=int, help="Random seed for the scramble")
    parser.add_argument("--benchmark", type=int, metavar="N",
                        help="Time N random moves on every representation and exit")
    parser.add_argument("--quiet", action="store_true", help="Only print the result")
    args = parser.parse_args(argv)

    if args.scramble_moves < 0:
        parser.error("--scramble-moves must be >= 0")
    if args.max_depth is not None and args.max_depth < 0:
        parser.error("--max-depth must be >= 0")

    rng = random.Random(args.seed)

    if args.benchmark is not None:
        _, consistent = run_benchmark(args.benchmark, rng)
        return 0 if consistent else 1

    if args.scramble is not None:
        try:
            scramble_moves = parse_algorithm(args.scramble)
        except ValueError as e:
            parser.error(str(e))
        cube = REPRESENTATIONS[args.representation]().apply_moves(scramble_moves)
    else:
        cube, scramble_moves = generate_scramble(args.representation, args.scramble_moves, rng)

    print(f"Scramble: {format_moves(scramble_moves)}")
    if not args.quiet:
        print(cube)
        print()

    solver = build_solver(args.solver, max_search_depth=args.max_depth,
                          heuristic=args.heuristic, verbose=not args.quiet)
    start_time = time.time()
    success, solution = solver.solve(cube)
    elapsed = time.time() - start_time

    if not success:
        print(f"No solution within depth {solver.max_search_depth} (inconclusive)")
        return 1

    verified = verify_solution(cube, solution)
    print(f"Solution: {format_moves(solution)} ({len(solution)} moves)")
    print(f"Verified: {verified}")
    print(f"Time: {elapsed:.3f}s")
    return 0 if verified else 1


if __name__ == "__main__":
    sys.exit(main())
