import numpy as np

from cube import Color, Move, RubiksCube
from move_tables import FACELET_PERMUTATIONS, SOLVED_FACELETS, facelet_index


class RubiksCube1dArray(RubiksCube):
    """
    Flat representation: 54 colours in one numpy array, facelet
    (face, row, col) stored at face * 9 + row * 3 + col.

    Every move is a single gather through its row of FACELET_PERMUTATIONS.
    """

    def __init__(self):
        # Initialize a solved cube
        self.cells = SOLVED_FACELETS.copy()

    def copy(self):
        """Create a deep copy of the cube object."""
        new_cube = RubiksCube1dArray()
        new_cube.cells = self.cells.copy()
        return new_cube

    def _set_colors(self, colors):
        self.cells = np.array(list(colors), dtype=np.uint8)

    def get_color(self, face, row, col):
        assert 0 <= face < 6 and 0 <= row < 3 and 0 <= col < 3
        return Color(int(self.cells[facelet_index(face, row, col)]))

    def is_solved(self):
        return bool(np.array_equal(self.cells, SOLVED_FACELETS))

    def state_key(self):
        return self.cells.tobytes()

    def move(self, move):
        self.cells = self.cells[FACELET_PERMUTATIONS[move]]
        return self

    def L(self):
        return self.move(Move.L)

    def L_prime(self):
        return self.move(Move.L_PRIME)

    def L2(self):
        return self.move(Move.L2)

    def R(self):
        return self.move(Move.R)

    def R_prime(self):
        return self.move(Move.R_PRIME)

    def R2(self):
        return self.move(Move.R2)

    def U(self):
        return self.move(Move.U)

    def U_prime(self):
        return self.move(Move.U_PRIME)

    def U2(self):
        return self.move(Move.U2)

    def D(self):
        return self.move(Move.D)

    def D_prime(self):
        return self.move(Move.D_PRIME)

    def D2(self):
        return self.move(Move.D2)

    def F(self):
        return self.move(Move.F)

    def F_prime(self):
        return self.move(Move.F_PRIME)

    def F2(self):
        return self.move(Move.F2)

    def B(self):
        return self.move(Move.B)

    def B_prime(self):
        return self.move(Move.B_PRIME)

    def B2(self):
        return self.move(Move.B2)
