from dataclasses import dataclass

PRECISIONS = ("f32", "f64")


def _check_common(cfg):
    if cfg.rows < 3 or cfg.cols < 3:
        raise ValueError(f"Grid must be at least 3x3, got {cfg.rows}x{cfg.cols}")
    if cfg.precision not in PRECISIONS:
        raise ValueError(f"Unknown precision: {cfg.precision}")
    if cfg.steps_every < 1:
        raise ValueError(f"steps_every must be >= 1, got {cfg.steps_every}")
    if cfg.half_width < 0:
        raise ValueError(f"half_width must be >= 0, got {cfg.half_width}")
    if cfg.dt <= 0 or cfg.dx <= 0 or cfg.dy <= 0:
        raise ValueError("dt, dx and dy must be positive")


@dataclass(slots=True, kw_only=True)
class AdvectionConfig:
    rows: int = 100
    cols: int = 100
    iterations: int = 1000
    u: float = 0.1  # Velocity along the row index
    v: float = 0.1  # Velocity along the column index
    dt: float = 1.0
    dx: float = 1.0
    dy: float = 1.0
    half_width: int = 7
    seed_value: float = 1.0
    precision: str = "f32"
    steps_every: int = 1
    cell_size: int = 2
    cx: float = 0.0
    cy: float = 0.0

    def __post_init__(self):
        _check_common(self)
        self.cx = self.u * self.dt / self.dx
        self.cy = self.v * self.dt / self.dy

    @property
    def stable(self) -> bool:
        # Reported only, never enforced
        return self.cx + self.cy <= 1.0


@dataclass(slots=True, kw_only=True)
class DiffusionConfig:
    rows: int = 100
    cols: int = 100
    iterations: int = 1000
    D: float = 0.25  # Diffusion coefficient
    dt: float = 1.0
    dx: float = 1.0
    dy: float = 1.0
    half_width: int = 5
    seed_value: float = 1.0
    precision: str = "f32"
    steps_every: int = 1
    cell_size: int = 2
    r: float = 0.0

    def __post_init__(self):
        _check_common(self)
        if self.dx != self.dy:
            raise ValueError(f"Diffusion needs dx == dy, got {self.dx} and {self.dy}")
        self.r = self.D * self.dt / (self.dx * self.dx)

    @property
    def stable(self) -> bool:
        return self.r <= 0.25
