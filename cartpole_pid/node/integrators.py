"""Fixed-step ODE integrators for continuous nodes."""

from typing import Callable

import numpy as np

from cartpole_pid.node.core.types import NumericArray


def runge_kutta_4(
    state_transition_map: Callable[[NumericArray], NumericArray],
    state: NumericArray,
    step_size: float,
) -> NumericArray:
    """Advance ``state`` by one classical 4th-order Runge-Kutta step.

    Args:
        state_transition_map: Right-hand side ``f(state) -> d state / dt``.
            Any control input must already be bound and is held constant
            across all four stages.
        state: Current state vector.
        step_size: Integration step ``h``.

    Returns:
        New state vector. The input array is not modified.
    """
    state = np.asarray(state, dtype=float)
    h = step_size
    k1 = state_transition_map(state)
    k2 = state_transition_map(state + h / 2 * k1)
    k3 = state_transition_map(state + h / 2 * k2)
    k4 = state_transition_map(state + h * k3)
    return state + h / 6 * (k1 + 2 * k2 + 2 * k3 + k4)
