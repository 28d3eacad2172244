from cube import Color, Face, RubiksCube
from move_tables import RING, RING_INDEX, RING_STRIPS

MASK_64 = (1 << 64) - 1
BYTE = 0xFF


def _solved_face(face):
    bits = 0
    for i in range(len(RING)):
        bits |= (1 << face) << (8 * i)
    return bits


SOLVED_FACES = [_solved_face(face) for face in Face]

# (face, bit shift) for each facelet in state_key order, None for centres
KEY_LAYOUT = [
    (face, None if (row, col) == (1, 1) else 8 * RING_INDEX[(row, col)])
    for face in Face for row in range(3) for col in range(3)
]


class RubiksCubeBitboard(RubiksCube):
    """
    Bitboard representation: one 64-bit integer per face.

    The 8 outer facelets of a face are stored clockwise from the top-left
    corner, one byte each, and a byte holds its colour one-hot (1 << colour).
    Centres never move and are not stored.

    Turning a face's own facelets clockwise is a 16-bit rotate left; the
    neighbouring strips are moved byte by byte.
    """

    def __init__(self):
        # Initialize a solved cube
        self.bitboard = list(SOLVED_FACES)

    def copy(self):
        """Create a deep copy of the cube object."""
        new_cube = RubiksCubeBitboard()
        new_cube.bitboard = list(self.bitboard)
        return new_cube

    def _set_colors(self, colors):
        colors = list(colors)
        for face in Face:
            assert colors[face * 9 + 4] == face, "centres cannot move"
            bits = 0
            for i, (row, col) in enumerate(RING):
                bits |= (1 << colors[face * 9 + row * 3 + col]) << (8 * i)
            self.bitboard[face] = bits

    def get_color(self, face, row, col):
        assert 0 <= face < 6 and 0 <= row < 3 and 0 <= col < 3
        if (row, col) == (1, 1):
            return Color(face)
        one_hot = (self.bitboard[face] >> (8 * RING_INDEX[(row, col)])) & BYTE
        return Color(one_hot.bit_length() - 1)

    def is_solved(self):
        return self.bitboard == SOLVED_FACES

    def state_key(self):
        bitboard = self.bitboard
        return bytes(face if shift is None else ((bitboard[face] >> shift) & BYTE).bit_length() - 1
                     for face, shift in KEY_LAYOUT)

    def _rotate_face(self, face, quarter_turns):
        shift = 16 * quarter_turns
        bits = self.bitboard[face]
        self.bitboard[face] = ((bits << shift) | (bits >> (64 - shift))) & MASK_64

    def _cycle_strips(self, face, quarter_turns):
        strips = RING_STRIPS[face]
        saved = [[(self.bitboard[strip_face] >> (8 * i)) & BYTE for i in ring]
                 for strip_face, ring in strips]
        for k, (strip_face, ring) in enumerate(strips):
            bits = self.bitboard[strip_face]
            for i, value in zip(ring, saved[(k - quarter_turns) % 4]):
                bits = (bits & ~(BYTE << (8 * i))) | (value << (8 * i))
            self.bitboard[strip_face] = bits

    def _turn(self, face, quarter_turns):
        self._rotate_face(face, quarter_turns)
        self._cycle_strips(face, quarter_turns)
        return self

    def L(self):
        return self._turn(Face.LEFT, 1)

    def L_prime(self):
        return self._turn(Face.LEFT, 3)

    def L2(self):
        return self._turn(Face.LEFT, 2)

    def R(self):
        return self._turn(Face.RIGHT, 1)

    def R_prime(self):
        return self._turn(Face.RIGHT, 3)

    def R2(self):
        return self._turn(Face.RIGHT, 2)

    def U(self):
        return self._turn(Face.UP, 1)

    def U_prime(self):
        return self._turn(Face.UP, 3)

    def U2(self):
        return self._turn(Face.UP, 2)

    def D(self):
        return self._turn(Face.DOWN, 1)

    def D_prime(self):
        return self._turn(Face.DOWN, 3)

    def D2(self):
        return self._turn(Face.DOWN, 2)

    def F(self):
        return self._turn(Face.FRONT, 1)

    def F_prime(self):
        return self._turn(Face.FRONT, 3)

    def F2(self):
        return self._turn(Face.FRONT, 2)

    def B(self):
        return self._turn(Face.BACK, 1)

    def B_prime(self):
        return self._turn(Face.BACK, 3)

    def B2(self):
        return self._turn(Face.BACK, 2)
