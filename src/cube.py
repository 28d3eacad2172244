import random
from abc import ABC, abstractmethod
from enum import IntEnum


class Face(IntEnum):
    UP = 0
    LEFT = 1
    FRONT = 2
    RIGHT = 3
    BACK = 4
    DOWN = 5


class Color(IntEnum):
    WHITE = 0
    GREEN = 1
    RED = 2
    BLUE = 3
    ORANGE = 4
    YELLOW = 5


class Move(IntEnum):
    L = 0
    L_PRIME = 1
    L2 = 2
    R = 3
    R_PRIME = 4
    R2 = 5
    U = 6
    U_PRIME = 7
    U2 = 8
    D = 9
    D_PRIME = 10
    D2 = 11
    F = 12
    F_PRIME = 13
    F2 = 14
    B = 15
    B_PRIME = 16
    B2 = 17


# Define possible moves, indexed by Move
MOVE_NAMES = ["L", "L'", "L2", "R", "R'", "R2", "U", "U'", "U2",
              "D", "D'", "D2", "F", "F'", "F2", "B", "B'", "B2"]

# Method implementing each move on a RubiksCube, indexed by Move
MOVE_METHODS = ["L", "L_prime", "L2", "R", "R_prime", "R2", "U", "U_prime", "U2",
                "D", "D_prime", "D2", "F", "F_prime", "F2", "B", "B_prime", "B2"]

NAME_TO_MOVE = {name: Move(i) for i, name in enumerate(MOVE_NAMES)}

# quarter <-> counter-quarter, half turn is its own inverse
INVERSE_MOVES = {m: Move(m - m % 3 + (1, 0, 2)[m % 3]) for m in Move}

# The face a move turns, indexed by Move
MOVE_FACE = [Face.LEFT] * 3 + [Face.RIGHT] * 3 + [Face.UP] * 3 + \
            [Face.DOWN] * 3 + [Face.FRONT] * 3 + [Face.BACK] * 3

# Corner slots URF, UFL, ULB, UBR, DFR, DLF, DBL, DRB. Each slot lists its
# facelets starting with the U/D one and going clockwise.
CORNER_FACELETS = [
    ((Face.UP, 2, 2), (Face.RIGHT, 0, 0), (Face.FRONT, 0, 2)),
    ((Face.UP, 2, 0), (Face.FRONT, 0, 0), (Face.LEFT, 0, 2)),
    ((Face.UP, 0, 0), (Face.LEFT, 0, 0), (Face.BACK, 0, 2)),
    ((Face.UP, 0, 2), (Face.BACK, 0, 0), (Face.RIGHT, 0, 2)),
    ((Face.DOWN, 0, 2), (Face.FRONT, 2, 2), (Face.RIGHT, 2, 0)),
    ((Face.DOWN, 0, 0), (Face.LEFT, 2, 2), (Face.FRONT, 2, 0)),
    ((Face.DOWN, 2, 0), (Face.BACK, 2, 2), (Face.LEFT, 2, 0)),
    ((Face.DOWN, 2, 2), (Face.RIGHT, 2, 2), (Face.BACK, 2, 0)),
]

# Edge slots UR, UF, UL, UB, DR, DF, DL, DB, FR, FL, BL, BR. The first facelet
# is the U/D one, or the F/B one for the middle layer.
EDGE_FACELETS = [
    ((Face.UP, 1, 2), (Face.RIGHT, 0, 1)),
    ((Face.UP, 2, 1), (Face.FRONT, 0, 1)),
    ((Face.UP, 1, 0), (Face.LEFT, 0, 1)),
    ((Face.UP, 0, 1), (Face.BACK, 0, 1)),
    ((Face.DOWN, 1, 2), (Face.RIGHT, 2, 1)),
    ((Face.DOWN, 0, 1), (Face.FRONT, 2, 1)),
    ((Face.DOWN, 1, 0), (Face.LEFT, 2, 1)),
    ((Face.DOWN, 2, 1), (Face.BACK, 2, 1)),
    ((Face.FRONT, 1, 2), (Face.RIGHT, 1, 0)),
    ((Face.FRONT, 1, 0), (Face.LEFT, 1, 2)),
    ((Face.BACK, 1, 2), (Face.LEFT, 1, 0)),
    ((Face.BACK, 1, 0), (Face.RIGHT, 1, 2)),
]

# Every face starts with the colour of the same index
CORNER_COLORS = [tuple(Color(face) for face, _, _ in slot) for slot in CORNER_FACELETS]
EDGE_COLORS = [tuple(Color(face) for face, _, _ in slot) for slot in EDGE_FACELETS]

CORNER_LOOKUP = {frozenset(colors): i for i, colors in enumerate(CORNER_COLORS)}
EDGE_LOOKUP = {frozenset(colors): i for i, colors in enumerate(EDGE_COLORS)}

# Kociemba facelet strings list the faces as U, R, F, D, L, B
KOCIEMBA_FACE_ORDER = [Face.UP, Face.RIGHT, Face.FRONT, Face.DOWN, Face.LEFT, Face.BACK]
KOCIEMBA_LETTERS = {Color(face): face.name[0] for face in Face}


def get_inverse_moves(moves):
    """Get the inverse sequence of moves to undo a sequence"""
    return [INVERSE_MOVES[move] for move in reversed(moves)]


def parse_algorithm(algorithm):
    """
    Parse a sequence of moves from a string notation.

    Examples:
    - "R U R'" gives [Move.R, Move.U, Move.R_PRIME]
    - "F2 B2 L' D" gives [Move.F2, Move.B2, Move.L_PRIME, Move.D]

    Raises:
        ValueError: on any token that is not one of the 18 face turns
    """
    moves = []
    for token in algorithm.split():
        if token not in NAME_TO_MOVE:
            raise ValueError(f"Invalid move notation: {token}")
        moves.append(NAME_TO_MOVE[token])
    return moves


class RubiksCube(ABC):
    """
    Shared contract for every 3x3 Rubik's cube representation.

    The cube is 6 faces of 9 facelets. Faces are indexed as follows:
    0: Up (White)
    1: Left (Green)
    2: Front (Red)
    3: Right (Blue)
    4: Back (Orange)
    5: Down (Yellow)

    Rows and columns are 0-indexed and read with the face pointing at you,
    rows top to bottom and columns left to right. The faces unfold as

          U
        L F R B
          D

    Subclasses store the facelets however they like; solvers only ever use
    the methods defined here, so any representation can be swapped in.
    """

    @abstractmethod
    def get_color(self, face, row, col):
        """Return the Color at (row, col) of face."""

    @abstractmethod
    def is_solved(self):
        """Return True if every face shows only its own colour."""

    @abstractmethod
    def copy(self):
        """Create an independent copy of the cube."""

    @abstractmethod
    def _set_colors(self, colors):
        """Overwrite the state from 54 colour values in face, row, col order."""

    # Face turns. Each mutates the cube in place and returns it.

    @abstractmethod
    def L(self):
        """Left face clockwise."""

    @abstractmethod
    def L_prime(self):
        """Left face counterclockwise."""

    @abstractmethod
    def L2(self):
        """Left face 180 degrees."""

    @abstractmethod
    def R(self):
        """Right face clockwise."""

    @abstractmethod
    def R_prime(self):
        """Right face counterclockwise."""

    @abstractmethod
    def R2(self):
        """Right face 180 degrees."""

    @abstractmethod
    def U(self):
        """Up face clockwise."""

    @abstractmethod
    def U_prime(self):
        """Up face counterclockwise."""

    @abstractmethod
    def U2(self):
        """Up face 180 degrees."""

    @abstractmethod
    def D(self):
        """Down face clockwise."""

    @abstractmethod
    def D_prime(self):
        """Down face counterclockwise."""

    @abstractmethod
    def D2(self):
        """Down face 180 degrees."""

    @abstractmethod
    def F(self):
        """Front face clockwise."""

    @abstractmethod
    def F_prime(self):
        """Front face counterclockwise."""

    @abstractmethod
    def F2(self):
        """Front face 180 degrees."""

    @abstractmethod
    def B(self):
        """Back face clockwise."""

    @abstractmethod
    def B_prime(self):
        """Back face counterclockwise."""

    @abstractmethod
    def B2(self):
        """Back face 180 degrees."""

    @staticmethod
    def get_color_letter(color):
        """First letter of the colour name, e.g. Color.GREEN -> 'G'."""
        return Color(color).name[0]

    @staticmethod
    def get_move(move):
        """Move in string notation, e.g. Move.L_PRIME -> "L'"."""
        return MOVE_NAMES[move]

    @classmethod
    def from_cube(cls, other):
        """Build this representation holding the same state as another cube."""
        cube = cls()
        cube._set_colors(other.state_key())
        return cube

    def move(self, move):
        """Apply one of the 18 moves and return the cube."""
        getattr(self, MOVE_METHODS[move])()
        return self

    def invert(self, move):
        """Undo a move."""
        return self.move(INVERSE_MOVES[move])

    def apply_moves(self, moves):
        for move in moves:
            self.move(move)
        return self

    def apply_algorithm(self, algorithm):
        """
        Apply a sequence of moves from a string notation.

        Examples:
        - "R U R'" applies R, then U, then R'
        - "F2 B2 L' D" applies F2, then B2, then L', then D
        """
        return self.apply_moves(parse_algorithm(algorithm))

    def random_shuffle(self, times, rng=None):
        """
        Apply `times` moves drawn uniformly from the 18 and return them.

        Args:
            times: number of random moves
            rng: optional random.Random for reproducible scrambles

        Returns:
            list: the applied moves, in order
        """
        assert times >= 0
        rng = rng or random
        applied_moves = []
        for _ in range(times):
            move = Move(rng.randrange(len(Move)))
            self.move(move)
            applied_moves.append(move)
        return applied_moves

    def state_key(self):
        """
        54 colour bytes in face, row, col order.

        The key is the same for every representation holding the same state,
        so it can be used for visited sets and to compare representations.
        """
        return bytes(self.get_color(face, row, col)
                     for face in Face for row in range(3) for col in range(3))

    def get_corner_color_string(self, ind):
        """Colour letters of corner slot ind, U/D facelet first, then clockwise."""
        assert 0 <= ind < 8
        return "".join(self.get_color_letter(self.get_color(*facelet))
                       for facelet in CORNER_FACELETS[ind])

    def get_corner_index(self, ind):
        """Which corner piece (0-7, numbered by home slot) sits in slot ind."""
        assert 0 <= ind < 8
        colors = frozenset(self.get_color(*facelet) for facelet in CORNER_FACELETS[ind])
        return CORNER_LOOKUP[colors]

    def get_corner_orientation(self, ind):
        """Twist (0, 1 or 2) of the corner in slot ind: where its U/D sticker is."""
        assert 0 <= ind < 8
        for twist, facelet in enumerate(CORNER_FACELETS[ind]):
            if self.get_color(*facelet) in (Color.WHITE, Color.YELLOW):
                return twist
        raise ValueError(f"Corner slot {ind} has no white or yellow sticker")

    def get_edge_color_string(self, ind):
        assert 0 <= ind < 12
        return "".join(self.get_color_letter(self.get_color(*facelet))
                       for facelet in EDGE_FACELETS[ind])

    def get_edge_index(self, ind):
        """Which edge piece (0-11, numbered by home slot) sits in slot ind."""
        assert 0 <= ind < 12
        colors = frozenset(self.get_color(*facelet) for facelet in EDGE_FACELETS[ind])
        return EDGE_LOOKUP[colors]

    def get_edge_orientation(self, ind):
        """0 if the piece's reference sticker is on the slot's reference facelet, else 1."""
        assert 0 <= ind < 12
        first = self.get_color(*EDGE_FACELETS[ind][0])
        return 0 if first == EDGE_COLORS[self.get_edge_index(ind)][0] else 1

    def to_kociemba_string(self):
        """
        Convert cube state to Kociemba string notation.

        Kociemba uses the following conventions:
        - Each facelet is named by the face whose centre has its colour
        - The order of faces is: Up, Right, Front, Down, Left, Back
        - Each face is read from top-left to bottom-right

        Returns:
            str: A 54-character string representing the cube state
        """
        return "".join(KOCIEMBA_LETTERS[self.get_color(face, row, col)]
                       for face in KOCIEMBA_FACE_ORDER
                       for row in range(3) for col in range(3))

    def __eq__(self, other):
        if not isinstance(other, RubiksCube):
            return NotImplemented
        return self.state_key() == other.state_key()

    # Mutable, compare with state_key() when hashing is needed
    __hash__ = None

    def __str__(self):
        """Return the cube unfolded in planar format."""
        def row_letters(face, row):
            return " ".join(self.get_color_letter(self.get_color(face, row, col))
                            for col in range(3))

        result = []

        # Up face
        for row in range(3):
            result.append(" " * 8 + row_letters(Face.UP, row))
        result.append("")

        # Left, Front, Right, Back faces side by side
        for row in range(3):
            result.append("   ".join(row_letters(face, row)
                                     for face in (Face.LEFT, Face.FRONT, Face.RIGHT, Face.BACK)))
        result.append("")

        # Down face
        for row in range(3):
            result.append(" " * 8 + row_letters(Face.DOWN, row))

        return "\n".join(result)
