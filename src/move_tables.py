"""
Move tables for the cube representations.

Everything here is computed once at import time and never changed after.

The facelet permutation table is derived from the geometry of the cube: each
facelet is given a position on the 3x3x3 lattice and an outward normal, the
layer of a face is rotated a quarter turn about that face's normal, and the
rotated facelet is looked up again. The strip tables used by the grid and
bitboard representations are written out by hand and checked against the
derived permutations in move_tables_test.py.

Permutation format: new_state[i] = old_state[perm[i]]
"""

import numpy as np

from cube import Face, Move, MOVE_FACE

NUM_FACELETS = 54

# x points right, y up, z towards the viewer (the front face)
FACE_NORMALS = {
    Face.UP: (0, 1, 0),
    Face.LEFT: (-1, 0, 0),
    Face.FRONT: (0, 0, 1),
    Face.RIGHT: (1, 0, 0),
    Face.BACK: (0, 0, -1),
    Face.DOWN: (0, -1, 0),
}


def facelet_index(face, row, col):
    return face * 9 + row * 3 + col


def facelet_position(face, row, col):
    """Lattice position of a facelet, each coordinate in {-1, 0, 1}."""
    if face == Face.UP:
        return (col - 1, 1, row - 1)
    if face == Face.DOWN:
        return (col - 1, -1, 1 - row)
    if face == Face.FRONT:
        return (col - 1, 1 - row, 1)
    if face == Face.BACK:
        return (1 - col, 1 - row, -1)
    if face == Face.LEFT:
        return (-1, 1 - row, col - 1)
    return (1, 1 - row, 1 - col)


def _rotate_clockwise(v, n):
    """Quarter turn of v about axis n, clockwise when looking at the face from outside."""
    dot = v[0] * n[0] + v[1] * n[1] + v[2] * n[2]
    cross = (n[1] * v[2] - n[2] * v[1],
             n[2] * v[0] - n[0] * v[2],
             n[0] * v[1] - n[1] * v[0])
    return tuple(n[i] * dot - cross[i] for i in range(3))


# (position, normal) -> facelet index
_STICKERS = {
    (facelet_position(face, row, col), FACE_NORMALS[face]): facelet_index(face, row, col)
    for face in Face for row in range(3) for col in range(3)
}


def apply_perm(state, perm):
    """Permutes the state based on indices."""
    return [state[i] for i in perm]


def quarter_turn_permutation(face):
    """Facelet permutation of a clockwise quarter turn of face."""
    normal = FACE_NORMALS[face]
    perm = list(range(NUM_FACELETS))
    for (position, sticker_normal), src in _STICKERS.items():
        # Only the layer on this face moves
        if sum(p * n for p, n in zip(position, normal)) != 1:
            continue
        dest = _STICKERS[(_rotate_clockwise(position, normal),
                          _rotate_clockwise(sticker_normal, normal))]
        perm[dest] = src
    return perm


def _build_facelet_permutations():
    table = np.empty((len(Move), NUM_FACELETS), dtype=np.intp)
    for move in Move:
        quarter = quarter_turn_permutation(MOVE_FACE[move])
        half = apply_perm(quarter, quarter)
        counter = apply_perm(half, quarter)
        table[move] = (quarter, counter, half)[move % 3]
    table.setflags(write=False)
    return table


FACELET_PERMUTATIONS = _build_facelet_permutations()

SOLVED_FACELETS = np.repeat(np.arange(6, dtype=np.uint8), 9)
SOLVED_FACELETS.setflags(write=False)


def _strip(face, cells):
    return (face, tuple(cells))


# The four strips of adjacent facelets around each face, in the order a
# clockwise quarter turn carries them: strip k moves into strip k + 1, and
# the j-th facelet of one strip lands on the j-th facelet of the next.
ADJACENT_STRIPS = {
    Face.UP: [
        _strip(Face.FRONT, [(0, 0), (0, 1), (0, 2)]),
        _strip(Face.LEFT, [(0, 0), (0, 1), (0, 2)]),
        _strip(Face.BACK, [(0, 0), (0, 1), (0, 2)]),
        _strip(Face.RIGHT, [(0, 0), (0, 1), (0, 2)]),
    ],
    Face.DOWN: [
        _strip(Face.FRONT, [(2, 0), (2, 1), (2, 2)]),
        _strip(Face.RIGHT, [(2, 0), (2, 1), (2, 2)]),
        _strip(Face.BACK, [(2, 0), (2, 1), (2, 2)]),
        _strip(Face.LEFT, [(2, 0), (2, 1), (2, 2)]),
    ],
    Face.RIGHT: [
        _strip(Face.FRONT, [(0, 2), (1, 2), (2, 2)]),
        _strip(Face.UP, [(0, 2), (1, 2), (2, 2)]),
        _strip(Face.BACK, [(2, 0), (1, 0), (0, 0)]),
        _strip(Face.DOWN, [(0, 2), (1, 2), (2, 2)]),
    ],
    Face.LEFT: [
        _strip(Face.UP, [(0, 0), (1, 0), (2, 0)]),
        _strip(Face.FRONT, [(0, 0), (1, 0), (2, 0)]),
        _strip(Face.DOWN, [(0, 0), (1, 0), (2, 0)]),
        _strip(Face.BACK, [(2, 2), (1, 2), (0, 2)]),
    ],
    Face.FRONT: [
        _strip(Face.UP, [(2, 0), (2, 1), (2, 2)]),
        _strip(Face.RIGHT, [(0, 0), (1, 0), (2, 0)]),
        _strip(Face.DOWN, [(0, 2), (0, 1), (0, 0)]),
        _strip(Face.LEFT, [(2, 2), (1, 2), (0, 2)]),
    ],
    Face.BACK: [
        _strip(Face.UP, [(0, 0), (0, 1), (0, 2)]),
        _strip(Face.LEFT, [(2, 0), (1, 0), (0, 0)]),
        _strip(Face.DOWN, [(2, 2), (2, 1), (2, 0)]),
        _strip(Face.RIGHT, [(0, 2), (1, 2), (2, 2)]),
    ],
}

# Bitboard layout: the 8 outer facelets of a face, clockwise from the top-left
# corner. The centre never moves and is not stored.
RING = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0)]
RING_INDEX = {cell: i for i, cell in enumerate(RING)}

RING_STRIPS = {
    face: [(strip_face, tuple(RING_INDEX[cell] for cell in cells))
           for strip_face, cells in strips]
    for face, strips in ADJACENT_STRIPS.items()
}
