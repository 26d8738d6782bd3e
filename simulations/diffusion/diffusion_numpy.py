from core.configs import DiffusionConfig
from core.grid import dtype_for, initialize


class DiffusionNumPy:
    def __init__(self, config: DiffusionConfig):
        self.cfg = config
        self.rows = config.rows
        self.cols = config.cols
        self.r = config.r

        self.dtype = dtype_for(config.precision)

        # Init
        self.state = initialize(
            self.rows, self.cols, config.half_width, config.seed_value, self.dtype
        )

    @staticmethod
    def step_fn(rho, out, r):
        # 5-point Laplacian on strictly interior cells
        # rho[i+1, j] + rho[i-1, j] + rho[i, j+1] + rho[i, j-1] - 4*rho[i, j]
        c = rho[1:-1, 1:-1]
        laplacian = rho[2:, 1:-1] + rho[:-2, 1:-1] + rho[1:-1, 2:] + rho[1:-1, :-2] - 4 * c
        out[1:-1, 1:-1] = c + r * laplacian

        # Zero-gradient edges: left/right first, then top/bottom.
        # Corners end up with the top/bottom value.
        out[:, 0] = out[:, 1]
        out[:, -1] = out[:, -2]
        out[0, :] = out[1, :]
        out[-1, :] = out[-2, :]
        return out

    def step(self):
        self.step_fn(self.state.current, self.state.scratch, self.r)
        return self.state.commit()

    def run(self, iterations=None):
        n = self.cfg.iterations if iterations is None else iterations
        for _ in range(n):
            self.step()
        return self.state

    @property
    def rho(self):
        return self.state.current

    def get_value(self, i, j):
        return self.state.get_value(i, j)
