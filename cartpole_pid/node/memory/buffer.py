"""Buffer for storing simulation history."""

from typing import Dict

import numpy as np

from cartpole_pid.node.base import Node
from cartpole_pid.node.core.types import NumericArray


class DataBuffer(Node):
    """Circular buffer of per-tick time, state and control signal."""

    def __init__(
        self,
        state_dimension: int = 4,
        buffer_size: int = 1000,
        step_size: float = 0.02,
    ) -> None:
        """Initialize data buffer.

        Args:
            state_dimension: Length of the recorded state vectors.
            buffer_size: Number of ticks kept; older ticks are overwritten.
            step_size: Tick period of the recording.
        """
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        super().__init__(step_size=step_size, is_continuous=False, name="buffer")
        self.buffer_size = buffer_size
        self.time = self.define_variable(
            "time@buffer", value=np.zeros(buffer_size), shape=(buffer_size,)
        )
        self.state = self.define_variable(
            "state@buffer",
            value=np.zeros((buffer_size, state_dimension)),
            shape=(buffer_size, state_dimension),
        )
        self.control_signal = self.define_variable(
            "control_signal@buffer", value=np.zeros(buffer_size), shape=(buffer_size,)
        )
        self.count = self.define_variable("count", value=0)

    def __len__(self) -> int:
        return min(self.count.value, self.buffer_size)

    def record(self, time: float, state: NumericArray, control_signal: float) -> None:
        """Store one tick, overwriting the oldest one when full."""
        current_idx = self.count.value % self.buffer_size
        self.time.value[current_idx] = time
        self.state.value[current_idx] = state
        self.control_signal.value[current_idx] = control_signal
        self.count.value += 1

    def history(self) -> Dict[str, NumericArray]:
        """Recorded ticks in chronological order.

        Returns:
            Dict with ``time`` of shape ``(n,)``, ``state`` of shape
            ``(n, state_dimension)`` and ``control_signal`` of shape ``(n,)``.
        """
        n = len(self)
        if self.count.value <= self.buffer_size:
            order = np.arange(n)
        else:
            start = self.count.value % self.buffer_size
            order = np.roll(np.arange(self.buffer_size), -start)
        return {
            "time": self.time.value[order].copy(),
            "state": self.state.value[order].copy(),
            "control_signal": self.control_signal.value[order].copy(),
        }

    def step(self) -> None:
        """Recording is driven by ``record``."""
