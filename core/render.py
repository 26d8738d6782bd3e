import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

TITLES = {
    "advection": "2D Advection Simulation",
    "diffusion": "2D Diffusion Simulation",
}


def to_rgba(grid, max_intensity=1.0):
    """
    Map scalar values onto the red channel.

    Values are scaled by ``max_intensity`` and clamped to [0, 1] before being
    spread over 0..255; green and blue stay at 0, alpha at 255.
    """
    values = np.clip(np.asarray(grid, dtype=np.float64) / max_intensity, 0.0, 1.0)
    image = np.zeros(values.shape + (4,), dtype=np.uint8)
    image[..., 0] = (255 * values).astype(np.uint8)
    image[..., 3] = 255
    return image


def upscale(image, cell_size):
    if cell_size <= 1:
        return image
    return np.repeat(np.repeat(image, cell_size, axis=0), cell_size, axis=1)


def save_frame(grid, path, cell_size=1, max_intensity=1.0):
    dir_name = os.path.dirname(path)
    if dir_name:
        os.makedirs(dir_name, exist_ok=True)
    plt.imsave(path, upscale(to_rgba(grid, max_intensity), cell_size))
    return path


def animate(solver, gate, title="Simulation", interval=1000 / 60, frames=None):
    """Open a window and redraw the grid on every tick, stepping through ``gate``."""
    cell_size = solver.cfg.cell_size
    fig, ax = plt.subplots(
        figsize=(solver.cols * cell_size / 50, solver.rows * cell_size / 50)
    )
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(title)
    ax.set_axis_off()
    im = ax.imshow(to_rgba(solver.state.snapshot()), interpolation="nearest")

    def update(_):
        if gate.tick():
            solver.step()
        im.set_data(to_rgba(solver.state.snapshot()))
        return (im,)

    anim = FuncAnimation(
        fig, update, frames=frames, interval=interval, blit=True, cache_frame_data=False
    )
    plt.show()
    return anim
