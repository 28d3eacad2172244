import numpy as np

from cube import Color, Face, RubiksCube
from move_tables import ADJACENT_STRIPS

SOLVED_GRID = np.repeat(np.arange(6, dtype=np.uint8), 9).reshape(6, 3, 3)


def _strip_index(face, cells):
    """numpy index selecting the facelets of a strip, in strip order."""
    rows = np.array([row for row, _ in cells])
    cols = np.array([col for _, col in cells])
    return (face, rows, cols)


STRIP_INDICES = {
    face: [_strip_index(strip_face, cells) for strip_face, cells in strips]
    for face, strips in ADJACENT_STRIPS.items()
}


class RubiksCube3dArray(RubiksCube):
    """
    Dense grid representation: a (6, 3, 3) numpy array of colours indexed
    as grid[face, row, col].

    Each face turn rotates the face's own 3x3 block and cycles the four strips
    of neighbouring facelets around it.
    """

    def __init__(self):
        # Initialize a solved cube, each face filled with its own colour
        self.grid = SOLVED_GRID.copy()

    def copy(self):
        """Create a deep copy of the cube object."""
        new_cube = RubiksCube3dArray()
        new_cube.grid = self.grid.copy()
        return new_cube

    def _set_colors(self, colors):
        self.grid = np.array(list(colors), dtype=np.uint8).reshape(6, 3, 3)

    def get_color(self, face, row, col):
        assert 0 <= face < 6 and 0 <= row < 3 and 0 <= col < 3
        return Color(int(self.grid[face, row, col]))

    def is_solved(self):
        return bool(np.array_equal(self.grid, SOLVED_GRID))

    def state_key(self):
        return self.grid.tobytes()

    def _rotate_face_clockwise(self, face):
        self.grid[face] = np.rot90(self.grid[face], -1).copy()

    def _rotate_face_counterclockwise(self, face):
        self.grid[face] = np.rot90(self.grid[face], 1).copy()

    def _rotate_face_180(self, face):
        self.grid[face] = np.rot90(self.grid[face], 2).copy()

    def _cycle_strips(self, face, quarter_turns):
        """Move each strip around face quarter_turns places along the clockwise cycle."""
        strips = STRIP_INDICES[face]
        # Fancy indexing copies, so every strip is saved before any is overwritten
        saved = [self.grid[strip] for strip in strips]
        for i, strip in enumerate(strips):
            self.grid[strip] = saved[(i - quarter_turns) % 4]

    def L(self):
        """Left face clockwise."""
        self._rotate_face_clockwise(Face.LEFT)
        # Front gets left column from Up, Down from Front, Back from Down
        self._cycle_strips(Face.LEFT, 1)
        return self

    def L_prime(self):
        """Left face counterclockwise."""
        self._rotate_face_counterclockwise(Face.LEFT)
        self._cycle_strips(Face.LEFT, 3)
        return self

    def L2(self):
        """Left face 180 degrees."""
        self._rotate_face_180(Face.LEFT)
        # Swap Up and Down left columns, Front left and Back right columns
        self._cycle_strips(Face.LEFT, 2)
        return self

    def R(self):
        """Right face clockwise."""
        self._rotate_face_clockwise(Face.RIGHT)
        # Up gets right column from Front, Back from Up (flipped)
        self._cycle_strips(Face.RIGHT, 1)
        return self

    def R_prime(self):
        """Right face counterclockwise."""
        self._rotate_face_counterclockwise(Face.RIGHT)
        self._cycle_strips(Face.RIGHT, 3)
        return self

    def R2(self):
        """Right face 180 degrees."""
        self._rotate_face_180(Face.RIGHT)
        self._cycle_strips(Face.RIGHT, 2)
        return self

    def U(self):
        """Up face clockwise."""
        self._rotate_face_clockwise(Face.UP)
        # Left gets top row from Front, Back from Left, Right from Back
        self._cycle_strips(Face.UP, 1)
        return self

    def U_prime(self):
        """Up face counterclockwise."""
        self._rotate_face_counterclockwise(Face.UP)
        self._cycle_strips(Face.UP, 3)
        return self

    def U2(self):
        """Up face 180 degrees."""
        self._rotate_face_180(Face.UP)
        # Swap Front and Back top rows, Left and Right top rows
        self._cycle_strips(Face.UP, 2)
        return self

    def D(self):
        """Down face clockwise."""
        self._rotate_face_clockwise(Face.DOWN)
        # Right gets bottom row from Front, Back from Right, Left from Back
        self._cycle_strips(Face.DOWN, 1)
        return self

    def D_prime(self):
        """Down face counterclockwise."""
        self._rotate_face_counterclockwise(Face.DOWN)
        self._cycle_strips(Face.DOWN, 3)
        return self

    def D2(self):
        """Down face 180 degrees."""
        self._rotate_face_180(Face.DOWN)
        self._cycle_strips(Face.DOWN, 2)
        return self

    def F(self):
        """Front face clockwise."""
        self._rotate_face_clockwise(Face.FRONT)
        # Right gets left column from Up bottom row, Down top row from Right
        self._cycle_strips(Face.FRONT, 1)
        return self

    def F_prime(self):
        """Front face counterclockwise."""
        self._rotate_face_counterclockwise(Face.FRONT)
        self._cycle_strips(Face.FRONT, 3)
        return self

    def F2(self):
        """Front face 180 degrees."""
        self._rotate_face_180(Face.FRONT)
        self._cycle_strips(Face.FRONT, 2)
        return self

    def B(self):
        """Back face clockwise."""
        self._rotate_face_clockwise(Face.BACK)
        # Left gets left column from Up top row, Down bottom row from Left
        self._cycle_strips(Face.BACK, 1)
        return self

    def B_prime(self):
        """Back face counterclockwise."""
        self._rotate_face_counterclockwise(Face.BACK)
        self._cycle_strips(Face.BACK, 3)
        return self

    def B2(self):
        """Back face 180 degrees."""
        self._rotate_face_180(Face.BACK)
        self._cycle_strips(Face.BACK, 2)
        return self
