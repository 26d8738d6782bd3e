import numpy as np


def dtype_for(precision):
    return np.float32 if precision == "f32" else np.float64


def create(rows, cols, dtype=np.float32):
    """Return a zeroed ``rows x cols`` grid."""
    return np.zeros((rows, cols), dtype=dtype)


def seed_block(grid, half_width, value=1.0):
    """
    Set the centred block ``[c - h, c + h)`` on both axes to ``value``, in place.

    A half-width reaching past the edge is clipped at index 0 rather than
    wrapping around to the far side of the grid.
    """
    ci, cj = grid.shape[0] // 2, grid.shape[1] // 2
    i0 = max(ci - half_width, 0)
    j0 = max(cj - half_width, 0)
    grid[i0 : ci + half_width, j0 : cj + half_width] = value
    return grid


def initialize(rows, cols, half_width, value=1.0, dtype=np.float32):
    grid = seed_block(create(rows, cols, dtype), half_width, value)
    return GridState(grid)


class GridState:
    """
    Current grid plus a scratch buffer of the same shape.

    Steppers fill the scratch buffer (or hand over a freshly computed array)
    and call ``commit``; the current grid is only ever replaced as a whole, so
    anything holding a snapshot sees either the previous step or the next one.
    """

    def __init__(self, current, scratch=None):
        self.current = current
        self.scratch = current.copy() if scratch is None else scratch
        self._check(self.scratch)
        self.step_count = 0

    @property
    def shape(self):
        return self.current.shape

    @property
    def rows(self):
        return self.current.shape[0]

    @property
    def cols(self):
        return self.current.shape[1]

    def _check(self, grid):
        if grid.shape != self.shape:
            raise ValueError(
                f"Grid shape mismatch: current {self.shape}, got {grid.shape}"
            )
        if grid.dtype != self.current.dtype:
            raise ValueError(
                f"Grid dtype mismatch: current {self.current.dtype}, got {grid.dtype}"
            )

    def commit(self, scratch=None, steps=1):
        """Make ``scratch`` (default: the scratch buffer) the current grid."""
        if scratch is None:
            scratch = self.scratch
        self._check(scratch)
        self.current, self.scratch = scratch, self.current
        self.step_count += steps
        return self

    def get_value(self, i, j):
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(
                f"Cell ({i}, {j}) outside {self.rows}x{self.cols} grid"
            )
        return float(self.current[i, j])

    def snapshot(self):
        view = np.asarray(self.current).view()
        view.flags.writeable = False
        return view
