"""Time keeping and logging nodes."""

from typing import Callable, Dict, Optional

import numpy as np

from cartpole_pid.node.base import Node
from cartpole_pid.utils.logger import logger


class Clock(Node):
    """Time management node."""

    def __init__(self, fundamental_step_size: float) -> None:
        """Initialize Clock node."""
        super().__init__(
            step_size=fundamental_step_size,
            is_continuous=False,
            name="clock",
        )
        self.fundamental_step_size = fundamental_step_size
        self.time = self.define_variable("time", value=0.0)

    def step(self) -> None:
        """Increment time by fundamental step size."""
        assert isinstance(self.time.value, float), "Time must be a float"
        self.time.value += self.fundamental_step_size


class StepCounter(Node):
    """Counts steps in the simulation."""

    def __init__(self, step_size: float, start_count: int = 0) -> None:
        """Initialize StepCounter node."""
        super().__init__(
            step_size=step_size,
            is_continuous=False,
            name="step_counter",
        )
        self.counter = self.define_variable("counter", value=start_count)

    def step(self) -> None:
        """Increment counter by 1."""
        assert isinstance(self.counter.value, int), "Counter must be an integer"
        self.counter.value += 1


class Logger(Node):
    """State recording node.

    Every step formats the current value of each watched variable and emits
    a single INFO record, at most once per ``cooldown`` simulated seconds.
    """

    def __init__(
        self,
        clock: Clock,
        variables_to_log: Dict[str, Callable[[], object]],
        cooldown: float = 0.0,
        name: str = "logger",
    ) -> None:
        """Initialize Logger node.

        Args:
            clock: Clock providing the simulated time.
            variables_to_log: Mapping of display names to value getters.
            cooldown: Minimum simulated time between two records.
            name: Node name, used as the record prefix.
        """
        super().__init__(
            step_size=clock.step_size,
            is_continuous=False,
            name=name,
        )
        self.clock = clock
        self.variables_to_log = variables_to_log
        self.cooldown = cooldown
        self.last_log_time = self.define_variable("last_log_time", value=-float("inf"))

    @staticmethod
    def format_value(value: object) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (np.ndarray, list, tuple)):
            return f"[{', '.join(f'{v:.3f}' for v in value)}]"
        if isinstance(value, bool):
            return str(value)
        return f"{value:.3f}"

    def step(self) -> None:
        """Log current state if enough time has passed."""
        current_time = self.clock.time.value
        # Tolerance absorbs float drift of the accumulated clock.
        if current_time - self.last_log_time.value < self.cooldown - 1e-9:
            return

        log_parts = [f"t={current_time:.3f}"]
        for path, getter in self.variables_to_log.items():
            formatted_value = self.format_value(getter())
            if formatted_value is None:
                continue
            log_parts.append(f"{path}={formatted_value}")

        logger.info(f"{self.name} | " + " | ".join(log_parts))
        self.last_log_time.value = current_time
