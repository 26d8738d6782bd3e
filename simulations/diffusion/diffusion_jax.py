import jax

jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
from jax import jit, lax
from core.configs import DiffusionConfig
from core.grid import GridState, create, dtype_for, seed_block


class DiffusionJax:
    def __init__(self, config: DiffusionConfig):
        self.cfg = config
        self.rows = config.rows
        self.cols = config.cols
        self.r = config.r
        self.dtype = jnp.float64 if config.precision == "f64" else jnp.float32

        # Initial condition
        rho_init = seed_block(
            create(self.rows, self.cols, dtype_for(config.precision)),
            config.half_width,
            config.seed_value,
        )
        self.state = GridState(jnp.asarray(rho_init, dtype=self.dtype))

    @staticmethod
    @jit
    def step_fn(rho, r):
        c = rho[1:-1, 1:-1]
        laplacian = (
            rho[2:, 1:-1] +
            rho[:-2, 1:-1] +
            rho[1:-1, 2:] +
            rho[1:-1, :-2] -
            4.0 * c
        )
        rho_new = rho.at[1:-1, 1:-1].set(c + r * laplacian)

        # Zero-gradient edges, left/right before top/bottom
        rho_new = rho_new.at[:, 0].set(rho_new[:, 1])
        rho_new = rho_new.at[:, -1].set(rho_new[:, -2])
        rho_new = rho_new.at[0, :].set(rho_new[1, :])
        rho_new = rho_new.at[-1, :].set(rho_new[-2, :])
        return rho_new, None

    def run(self, iterations=None):
        n = self.cfg.iterations if iterations is None else iterations
        r = self.r

        def scan_body(carry, _):
            new_rho, _ = DiffusionJax.step_fn(carry, r)
            return new_rho, None

        final_rho, _ = lax.scan(scan_body, self.state.current, None, length=n)
        final_rho.block_until_ready()
        return self.state.commit(final_rho, steps=n)

    def step(self):
        rho_new, _ = self.step_fn(self.state.current, self.r)
        return self.state.commit(rho_new.block_until_ready())

    @property
    def rho(self):
        return self.state.current

    def get_value(self, i, j):
        return self.state.get_value(i, j)
