import unittest

import numpy as np

from cube import Face, INVERSE_MOVES, Move, MOVE_FACE
from move_tables import (ADJACENT_STRIPS, FACELET_PERMUTATIONS, NUM_FACELETS, RING,
                         RING_STRIPS, apply_perm, facelet_index, quarter_turn_permutation)


def strips_permutation(face):
    """Rebuild a clockwise quarter turn of face from the hand-written strip table."""
    perm = list(range(NUM_FACELETS))
    # The face itself: (row, col) moves to (col, 2 - row)
    for row in range(3):
        for col in range(3):
            perm[facelet_index(face, col, 2 - row)] = facelet_index(face, row, col)
    strips = ADJACENT_STRIPS[face]
    for k, (strip_face, cells) in enumerate(strips):
        next_face, next_cells = strips[(k + 1) % 4]
        for (row, col), (next_row, next_col) in zip(cells, next_cells):
            perm[facelet_index(next_face, next_row, next_col)] = facelet_index(strip_face, row, col)
    return perm


class TestFaceletPermutations(unittest.TestCase):

    def test_every_row_is_a_permutation(self):
        self.assertEqual(FACELET_PERMUTATIONS.shape, (18, 54))
        for move in Move:
            self.assertEqual(sorted(FACELET_PERMUTATIONS[move]), list(range(54)), move.name)

    def test_centres_never_move(self):
        for move in Move:
            for face in Face:
                centre = facelet_index(face, 1, 1)
                self.assertEqual(FACELET_PERMUTATIONS[move][centre], centre)

    def test_quarter_turn_moves_twenty_facelets(self):
        for face in Face:
            perm = quarter_turn_permutation(face)
            moved = sum(1 for i, src in enumerate(perm) if i != src)
            self.assertEqual(moved, 20, face.name)

    def test_move_then_inverse_is_identity(self):
        identity = list(range(54))
        for move in Move:
            composed = apply_perm(list(FACELET_PERMUTATIONS[move]),
                                  list(FACELET_PERMUTATIONS[INVERSE_MOVES[move]]))
            self.assertEqual(composed, identity, move.name)

    def test_four_quarter_turns_are_identity(self):
        for face in Face:
            perm = quarter_turn_permutation(face)
            state = list(range(54))
            for _ in range(4):
                state = apply_perm(state, perm)
            self.assertEqual(state, list(range(54)), face.name)

    def test_moves_on_different_faces_differ(self):
        rows = {tuple(FACELET_PERMUTATIONS[move]) for move in Move}
        self.assertEqual(len(rows), 18)

    def test_table_is_read_only(self):
        with self.assertRaises(ValueError):
            FACELET_PERMUTATIONS[0, 0] = 1


class TestStripTables(unittest.TestCase):

    def test_strips_match_geometry(self):
        for face in Face:
            self.assertEqual(strips_permutation(face), quarter_turn_permutation(face), face.name)

    def test_quarter_move_rows_come_from_geometry(self):
        for move in Move:
            if move % 3 == 0:
                np.testing.assert_array_equal(FACELET_PERMUTATIONS[move],
                                              quarter_turn_permutation(MOVE_FACE[move]))

    def test_strips_never_touch_their_own_face(self):
        for face, strips in ADJACENT_STRIPS.items():
            self.assertEqual(len(strips), 4)
            for strip_face, cells in strips:
                self.assertNotEqual(strip_face, face)
                self.assertEqual(len(cells), 3)

    def test_ring_strips_mirror_adjacent_strips(self):
        for face in Face:
            for (ring_face, ring), (strip_face, cells) in zip(RING_STRIPS[face],
                                                              ADJACENT_STRIPS[face]):
                self.assertEqual(ring_face, strip_face)
                self.assertEqual([RING[i] for i in ring], list(cells))


if __name__ == "__main__":
    unittest.main()
