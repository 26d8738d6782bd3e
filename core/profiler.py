import time


class Profiler:
    def __init__(self, name="Simulation"):
        self.name = name
        self.start_time = 0
        self.end_time = 0
        self.duration = 0

    def __enter__(self):
        # JAX solvers block on their results before returning, so wall time is accurate
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time

    def throughput(self, cells, steps):
        """Million cell updates per second."""
        if self.duration <= 0:
            return 0.0
        return (cells * steps / self.duration) / 1e6
