"""cartpole_pid: a cart-pole simulator stabilized by a PID controller.

The package is built from small computational nodes:

- ``CartPole``: inverted pendulum on a cart integrated with fixed-step RK4
- ``PIDController``: discrete PID regulator of the pole angle
- ``Clock``, ``StepCounter``, ``Logger``: bookkeeping of the tick loop
- ``DataBuffer``: time-series history of state and control signal
- ``Simulation``: explicit driver loop tying everything together
"""

from typing import Any, Dict

__version__ = "1.0.0"
__license__ = "MIT"

from cartpole_pid.node.base import Node
from cartpole_pid.node.core.variable import Variable
from cartpole_pid.node.classic_control.envs.continuous import (
    CartPole,
    CartPoleParameters,
)
from cartpole_pid.node.classic_control.controllers import (
    PIDController,
    PIDGains,
)
from cartpole_pid.node.logging import Clock, StepCounter, Logger
from cartpole_pid.node.memory import DataBuffer
from cartpole_pid.node.simulation import Simulation


def get_version() -> str:
    """Get the version of cartpole_pid."""
    return __version__


# Package metadata
metadata: Dict[str, Any] = {
    "name": "cartpole_pid",
    "version": __version__,
    "license": __license__,
}

__all__ = [
    "Node",
    "Variable",
    "CartPole",
    "CartPoleParameters",
    "PIDController",
    "PIDGains",
    "Clock",
    "StepCounter",
    "Logger",
    "DataBuffer",
    "Simulation",
    "get_version",
]
