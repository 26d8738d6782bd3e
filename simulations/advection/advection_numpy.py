from core.configs import AdvectionConfig
from core.grid import dtype_for, initialize


class AdvectionNumPy:
    def __init__(self, config: AdvectionConfig):
        self.cfg = config
        self.rows = config.rows
        self.cols = config.cols
        self.cx = config.cx
        self.cy = config.cy

        self.dtype = dtype_for(config.precision)

        # Init
        self.state = initialize(
            self.rows, self.cols, config.half_width, config.seed_value, self.dtype
        )

    @staticmethod
    def step_fn(phi, out, cx, cy):
        # Upwind difference for every cell with an (i-1, j-1) neighbour
        # phi[i, j] - cx*(phi[i, j] - phi[i-1, j]) - cy*(phi[i, j] - phi[i, j-1])
        c = phi[1:, 1:]
        out[1:, 1:] = c - cx * (c - phi[:-1, 1:]) - cy * (c - phi[1:, :-1])

        # Fixed-zero edges, overwriting whatever the stencil produced there
        out[:, 0] = 0
        out[:, -1] = 0
        out[0, :] = 0
        out[-1, :] = 0
        return out

    def step(self):
        self.step_fn(self.state.current, self.state.scratch, self.cx, self.cy)
        return self.state.commit()

    def run(self, iterations=None):
        n = self.cfg.iterations if iterations is None else iterations
        for _ in range(n):
            self.step()
        return self.state

    @property
    def phi(self):
        return self.state.current

    def get_value(self, i, j):
        return self.state.get_value(i, j)
