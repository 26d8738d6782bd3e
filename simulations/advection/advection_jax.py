import jax

jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
from jax import jit, lax
from core.configs import AdvectionConfig
from core.grid import GridState, create, dtype_for, seed_block


class AdvectionJax:
    def __init__(self, config: AdvectionConfig):
        self.cfg = config
        self.rows = config.rows
        self.cols = config.cols
        self.cx = config.cx
        self.cy = config.cy
        self.dtype = jnp.float64 if config.precision == "f64" else jnp.float32

        # Initial condition
        phi_init = seed_block(
            create(self.rows, self.cols, dtype_for(config.precision)),
            config.half_width,
            config.seed_value,
        )
        self.state = GridState(jnp.asarray(phi_init, dtype=self.dtype))

    @staticmethod
    @jit
    def step_fn(phi, params):
        cx, cy = params

        c = phi[1:, 1:]
        phi_new = phi.at[1:, 1:].set(
            c - cx * (c - phi[:-1, 1:]) - cy * (c - phi[1:, :-1])
        )

        # Fixed-zero edges
        phi_new = phi_new.at[:, 0].set(0.0)
        phi_new = phi_new.at[:, -1].set(0.0)
        phi_new = phi_new.at[0, :].set(0.0)
        phi_new = phi_new.at[-1, :].set(0.0)
        return phi_new, None

    def run(self, iterations=None):
        n = self.cfg.iterations if iterations is None else iterations
        params = (self.cx, self.cy)

        def scan_body(carry, _):
            new_phi, _ = AdvectionJax.step_fn(carry, params)
            return new_phi, None

        final_phi, _ = lax.scan(scan_body, self.state.current, None, length=n)
        final_phi.block_until_ready()
        return self.state.commit(final_phi, steps=n)

    def step(self):
        params = (self.cx, self.cy)
        phi_new, _ = self.step_fn(self.state.current, params)
        return self.state.commit(phi_new.block_until_ready())

    @property
    def phi(self):
        return self.state.current

    def get_value(self, i, j):
        return self.state.get_value(i, j)
