"""PID controller node."""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple

import numpy as np

from cartpole_pid.node.base import Node
from cartpole_pid.utils.logger import logger


@dataclass(frozen=True)
class PIDGains:
    """Proportional, integral and derivative gains."""

    kp: float = 20.0
    ki: float = 0.0
    kd: float = 10.0

    def __post_init__(self) -> None:
        for name in ("kp", "ki", "kd"):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ValueError(f"Gain {name} must be finite, got {value}")


class PIDMemory(NamedTuple):
    """Integral accumulator and previous error of a PID recurrence."""

    integral: float = 0.0
    last_error: float = 0.0


def pid_update(
    gains: PIDGains,
    setpoint: float,
    step_size: float,
    memory: PIDMemory,
    measurement: float,
) -> Tuple[float, PIDMemory]:
    """One step of the discrete PID recurrence.

    The derivative term is the raw difference of consecutive errors, it is
    not divided by ``step_size``.

    Returns:
        The control output and the updated memory.
    """
    error = setpoint - measurement
    integral = memory.integral + error * step_size
    output = (
        gains.kp * error
        + gains.ki * integral
        + gains.kd * (error - memory.last_error)
    )
    return output, PIDMemory(integral=integral, last_error=error)


class PIDController(Node):
    """PID controller tracking a scalar setpoint."""

    def __init__(
        self,
        kp: float = 20.0,
        ki: float = 0.0,
        kd: float = 10.0,
        step_size: float = 0.02,
        setpoint: float = 0.0,
        measurement_source: Optional[Callable[[], float]] = None,
        name: str = "pid_controller",
    ) -> None:
        """Initialize the PID controller.

        Args:
            kp: Proportional gain.
            ki: Integral gain.
            kd: Derivative gain.
            step_size: Sample interval ``dt``; must match the controlled system.
            setpoint: Target value of the measurement.
            measurement_source: Callable read by ``step`` to obtain the measurement.
            name: Node name.
        """
        super().__init__(step_size=step_size, is_continuous=False, name=name)
        self.gains = PIDGains(kp, ki, kd)
        self.setpoint = float(setpoint)
        self.measurement_source = measurement_source
        self.integral = self.define_variable("integral", value=0.0)
        self.last_error = self.define_variable("last_error", value=0.0)
        self.control_signal = self.define_variable("control_signal", value=0.0)

    @property
    def kp(self) -> float:
        return self.gains.kp

    @property
    def ki(self) -> float:
        return self.gains.ki

    @property
    def kd(self) -> float:
        return self.gains.kd

    @property
    def memory(self) -> PIDMemory:
        return PIDMemory(self.integral.value, self.last_error.value)

    def set_setpoint(self, value: float) -> None:
        """Change the target and clear the integral accumulator."""
        self.setpoint = float(value)
        self._reset(["integral"])

    def update(self, measurement: float) -> float:
        """Compute, store and return the control output for ``measurement``."""
        measurement = float(measurement)
        if not np.isfinite(measurement):
            raise ValueError(f"Measurement must be finite, got {measurement}")
        output, memory = pid_update(
            self.gains, self.setpoint, self.step_size, self.memory, measurement
        )
        self.integral.value = memory.integral
        self.last_error.value = memory.last_error
        self.control_signal.value = output
        return output

    def get_output(self) -> float:
        """Most recently computed output."""
        return self.control_signal.value

    def step(self) -> None:
        if self.measurement_source is None:
            raise ValueError(f"Node '{self.name}' has no measurement source")
        self.update(self.measurement_source())

    def reset(
        self,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None,
        *,
        apply_reset_modifier: bool = True,
    ) -> None:
        """Clear integral, last error and output, optionally replacing gains.

        Gains that are not given keep their current values.
        """
        gains = PIDGains(
            self.kp if kp is None else kp,
            self.ki if ki is None else ki,
            self.kd if kd is None else kd,
        )
        if gains != self.gains:
            logger.debug(
                f"{self.name} | gains kp={gains.kp:.3f} ki={gains.ki:.3f} kd={gains.kd:.3f}"
            )
        self.gains = gains
        super().reset(apply_reset_modifier=apply_reset_modifier)
