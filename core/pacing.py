class TickGate:
    """Let a step through only on every ``steps_every``-th tick."""

    def __init__(self, steps_every=1):
        if steps_every < 1:
            raise ValueError(f"steps_every must be >= 1, got {steps_every}")
        self.steps_every = steps_every
        self.frame_count = 0

    def tick(self) -> bool:
        self.frame_count += 1
        return self.frame_count % self.steps_every == 0


def drive(solver, gate, ticks, on_frame=None):
    """
    Host loop: one tick per frame, a step when the gate allows it, then
    ``on_frame(frame_index, state)`` with the committed state.
    """
    for frame in range(ticks):
        if gate.tick():
            solver.step()
        if on_frame is not None:
            on_frame(frame, solver.state)
    return solver.state
