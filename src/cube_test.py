import random
import unittest

import kociemba as koc

from cube import (Color, Face, INVERSE_MOVES, Move, RubiksCube, get_inverse_moves,
                  parse_algorithm)
from cube_1d_array import RubiksCube1dArray
from cube_3d_array import RubiksCube3dArray
from cube_bitboard import RubiksCubeBitboard

REPRESENTATIONS = [RubiksCube3dArray, RubiksCube1dArray, RubiksCubeBitboard]


class CubeContractTests:
    """Behaviour every representation must share. Mixed into one TestCase per class."""

    cube_class = None

    def scrambled(self, seed=7, times=25):
        cube = self.cube_class()
        cube.random_shuffle(times, random.Random(seed))
        return cube

    def test_new_cube_is_solved(self):
        cube = self.cube_class()
        self.assertTrue(cube.is_solved())
        for face in Face:
            for row in range(3):
                for col in range(3):
                    self.assertEqual(cube.get_color(face, row, col), Color(face))

    def test_get_color_rejects_out_of_range_indices(self):
        cube = self.cube_class()
        for face, row, col in ((-1, 0, 0), (6, 0, 0), (Face.UP, 3, 0), (Face.UP, 0, -1)):
            with self.assertRaises(AssertionError):
                cube.get_color(face, row, col)

    def test_any_single_move_unsolves(self):
        for move in Move:
            self.assertFalse(self.cube_class().move(move).is_solved(), move.name)

    def test_changing_one_facelet_unsolves(self):
        colors = bytearray(self.cube_class().state_key())
        # Swap two stickers of different colours on different faces
        colors[0], colors[9] = colors[9], colors[0]
        cube = self.cube_class()
        cube._set_colors(colors)
        self.assertFalse(cube.is_solved())

    def test_move_then_inverse_restores_state(self):
        cube = self.scrambled()
        for move in Move:
            before = cube.state_key()
            cube.move(move).move(INVERSE_MOVES[move])
            self.assertEqual(cube.state_key(), before, move.name)

    def test_invert_undoes_move(self):
        cube = self.scrambled(seed=3)
        for move in Move:
            before = cube.state_key()
            cube.move(move).invert(move)
            self.assertEqual(cube.state_key(), before, move.name)

    def test_quarter_turn_four_times_is_identity(self):
        cube = self.scrambled(seed=11)
        before = cube.state_key()
        for move in Move:
            times = 2 if move % 3 == 2 else 4
            for _ in range(times):
                cube.move(move)
            self.assertEqual(cube.state_key(), before, move.name)

    def test_named_methods_match_move(self):
        for move in Move:
            by_name = getattr(self.cube_class(), move.name.replace("_PRIME", "_prime"))()
            by_enum = self.cube_class().move(move)
            self.assertEqual(by_name.state_key(), by_enum.state_key(), move.name)

    def test_move_returns_cube_for_chaining(self):
        cube = self.cube_class()
        self.assertIs(cube.move(Move.R), cube)
        self.assertIs(cube.invert(Move.R), cube)
        self.assertTrue(cube.R().U().U_prime().R_prime().is_solved())

    def test_r_lifts_front_column_onto_up(self):
        cube = self.cube_class().move(Move.R)
        for row in range(3):
            self.assertEqual(cube.get_color(Face.UP, row, 2), Color.RED)
            self.assertEqual(cube.get_color(Face.FRONT, row, 2), Color.YELLOW)
            self.assertEqual(cube.get_color(Face.DOWN, row, 2), Color.ORANGE)
            self.assertEqual(cube.get_color(Face.BACK, row, 0), Color.WHITE)
            self.assertEqual(cube.get_color(Face.RIGHT, row, 0), Color.BLUE)

    def test_u_turns_front_row_to_left(self):
        cube = self.cube_class().move(Move.U)
        for col in range(3):
            self.assertEqual(cube.get_color(Face.LEFT, 0, col), Color.RED)
            self.assertEqual(cube.get_color(Face.FRONT, 0, col), Color.BLUE)
            self.assertEqual(cube.get_color(Face.RIGHT, 0, col), Color.ORANGE)
            self.assertEqual(cube.get_color(Face.BACK, 0, col), Color.GREEN)

    def test_f_turns_up_row_onto_right(self):
        cube = self.cube_class().move(Move.F)
        for i in range(3):
            self.assertEqual(cube.get_color(Face.UP, 2, i), Color.GREEN)
            self.assertEqual(cube.get_color(Face.RIGHT, i, 0), Color.WHITE)
            self.assertEqual(cube.get_color(Face.DOWN, 0, i), Color.BLUE)
            self.assertEqual(cube.get_color(Face.LEFT, i, 2), Color.YELLOW)

    def test_random_shuffle_zero_keeps_solved(self):
        cube = self.cube_class()
        self.assertEqual(cube.random_shuffle(0), [])
        self.assertTrue(cube.is_solved())

    def test_random_shuffle_returns_applied_moves(self):
        cube = self.cube_class()
        moves = cube.random_shuffle(30, random.Random(5))
        self.assertEqual(len(moves), 30)
        replay = self.cube_class().apply_moves(moves)
        self.assertEqual(replay.state_key(), cube.state_key())
        cube.apply_moves(get_inverse_moves(moves))
        self.assertTrue(cube.is_solved())

    def test_copy_is_independent(self):
        cube = self.scrambled()
        clone = cube.copy()
        self.assertEqual(clone, cube)
        clone.move(Move.F)
        self.assertNotEqual(clone, cube)

    def test_solved_corner_features(self):
        cube = self.cube_class()
        for i in range(8):
            self.assertEqual(cube.get_corner_index(i), i)
            self.assertEqual(cube.get_corner_orientation(i), 0)
        for i in range(12):
            self.assertEqual(cube.get_edge_index(i), i)
            self.assertEqual(cube.get_edge_orientation(i), 0)
        self.assertEqual(cube.get_corner_color_string(0), "WBR")
        self.assertEqual(cube.get_corner_color_string(7), "YBO")
        self.assertEqual(cube.get_edge_color_string(8), "RB")

    def test_r_twists_corners(self):
        cube = self.cube_class().move(Move.R)
        # URF now holds the DFR corner, twisted
        self.assertEqual(cube.get_corner_index(0), 4)
        self.assertEqual(cube.get_corner_orientation(0), 2)
        self.assertEqual(cube.get_corner_color_string(0), "RBY")

    def test_orientation_sums_are_preserved(self):
        for seed in range(5):
            cube = self.scrambled(seed=seed, times=40)
            corner_twist = sum(cube.get_corner_orientation(i) for i in range(8))
            edge_flip = sum(cube.get_edge_orientation(i) for i in range(12))
            self.assertEqual(corner_twist % 3, 0)
            self.assertEqual(edge_flip % 2, 0)
            self.assertEqual(sorted(cube.get_corner_index(i) for i in range(8)), list(range(8)))
            self.assertEqual(sorted(cube.get_edge_index(i) for i in range(12)), list(range(12)))

    def test_from_cube_converts_between_representations(self):
        cube = self.scrambled(seed=21)
        for other_class in REPRESENTATIONS:
            converted = other_class.from_cube(cube)
            self.assertIsInstance(converted, other_class)
            self.assertEqual(converted.state_key(), cube.state_key())
            back = self.cube_class.from_cube(converted)
            self.assertEqual(back.state_key(), cube.state_key())

    def test_apply_algorithm(self):
        cube = self.cube_class().apply_algorithm("R U R' U'")
        self.assertFalse(cube.is_solved())
        # Sexy Move 6 times is the identity
        cube = self.cube_class()
        for _ in range(6):
            cube.apply_algorithm("R U R' U'")
        self.assertTrue(cube.is_solved())

    def test_kociemba_solves_our_facelet_string(self):
        cube = self.cube_class().apply_algorithm("R U F' L2 D B' R2 U'")
        solution = koc.solve(cube.to_kociemba_string())
        cube.apply_algorithm(solution)
        self.assertTrue(cube.is_solved())

        cube = self.scrambled(seed=99, times=20)
        if not cube.is_solved():
            cube.apply_algorithm(koc.solve(cube.to_kociemba_string()))
        self.assertTrue(cube.is_solved())

    def test_str_shows_planar_layout(self):
        lines = str(self.cube_class()).splitlines()
        self.assertEqual(lines[0].strip(), "W W W")
        self.assertEqual(lines[4], "G G G   R R R   B B B   O O O")
        self.assertEqual(lines[-1].strip(), "Y Y Y")


class TestRubiksCube3dArray(CubeContractTests, unittest.TestCase):
    cube_class = RubiksCube3dArray


class TestRubiksCube1dArray(CubeContractTests, unittest.TestCase):
    cube_class = RubiksCube1dArray


class TestRubiksCubeBitboard(CubeContractTests, unittest.TestCase):
    cube_class = RubiksCubeBitboard


class TestRepresentationsAgree(unittest.TestCase):

    def test_same_moves_give_same_state(self):
        rng = random.Random(2024)
        cubes = [cube_class() for cube_class in REPRESENTATIONS]
        for _ in range(200):
            move = Move(rng.randrange(len(Move)))
            for cube in cubes:
                cube.move(move)
            keys = {cube.state_key() for cube in cubes}
            self.assertEqual(len(keys), 1, move.name)
            self.assertEqual(len({cube.is_solved() for cube in cubes}), 1)

    def test_equality_across_representations(self):
        self.assertEqual(RubiksCube3dArray().move(Move.B2), RubiksCubeBitboard().move(Move.B2))
        self.assertNotEqual(RubiksCube1dArray().move(Move.B), RubiksCubeBitboard().move(Move.B2))


class TestMoveNotation(unittest.TestCase):

    def test_get_move(self):
        self.assertEqual(RubiksCube.get_move(Move.L), "L")
        self.assertEqual(RubiksCube.get_move(Move.L_PRIME), "L'")
        self.assertEqual(RubiksCube.get_move(Move.L2), "L2")
        self.assertEqual(RubiksCube.get_move(Move.B_PRIME), "B'")

    def test_inverse_names_follow_convention(self):
        for move in Move:
            name = RubiksCube.get_move(move)
            inverse = RubiksCube.get_move(INVERSE_MOVES[move])
            if name.endswith("2"):
                self.assertEqual(inverse, name)
            elif name.endswith("'"):
                self.assertEqual(inverse, name[:-1])
            else:
                self.assertEqual(inverse, name + "'")

    def test_get_color_letter(self):
        self.assertEqual(RubiksCube.get_color_letter(Color.GREEN), "G")
        self.assertEqual("".join(RubiksCube.get_color_letter(c) for c in Color), "WGRBOY")

    def test_parse_algorithm(self):
        self.assertEqual(parse_algorithm("R U' F2"), [Move.R, Move.U_PRIME, Move.F2])
        self.assertEqual(parse_algorithm("  "), [])
        with self.assertRaises(ValueError):
            parse_algorithm("R M")

    def test_get_inverse_moves(self):
        self.assertEqual(get_inverse_moves([Move.R, Move.U2, Move.F_PRIME]),
                         [Move.F, Move.U2, Move.R_PRIME])


if __name__ == "__main__":
    unittest.main()
