"""Cart-pole is a node that represents an inverted pendulum on a cart.

There are four state variables in this system:

- x: the 1D position of the cart.
- x_dot: the velocity of the cart.
- theta: the angle of the pole in radians, 0 is vertical.
- theta_dot: the angular velocity of the pole.

The system is driven by a single scalar action, the force applied to the
cart. The equations of motion are linear in theta, without sin or cos.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from cartpole_pid.node.base import Node
from cartpole_pid.node.core.types import CartPoleStateTuple, NumericArray
from cartpole_pid.node.integrators import runge_kutta_4
from cartpole_pid.utils.logger import logger


@dataclass(frozen=True)
class CartPoleParameters:
    """Physical constants and failure thresholds of the cart-pole."""

    gravity: float = 9.8
    mass_cart: float = 0.5
    mass_pole: float = 0.2
    length: float = 0.3  # half-length of the pole
    pole_moment: float = 0.006
    friction: float = 0.1
    force_mag: float = 10.0
    cart_width: float = 0.2
    cart_height: float = 0.1
    x_threshold: float = 2.4
    theta_threshold: float = 12 / 360 * 2 * np.pi
    total_mass: float = field(init=False)

    def __post_init__(self) -> None:
        for name in (
            "mass_cart",
            "mass_pole",
            "length",
            "pole_moment",
            "cart_width",
            "cart_height",
            "x_threshold",
            "theta_threshold",
        ):
            value = getattr(self, name)
            if not (np.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be positive and finite, got {value}")
        for name in ("friction", "force_mag"):
            value = getattr(self, name)
            if not (np.isfinite(value) and value >= 0):
                raise ValueError(
                    f"{name} must be non-negative and finite, got {value}"
                )
        if not np.isfinite(self.gravity):
            raise ValueError(f"gravity must be finite, got {self.gravity}")
        object.__setattr__(self, "total_mass", self.mass_cart + self.mass_pole)

    @property
    def denominator(self) -> float:
        """Common denominator ``J*M + m*M_cart*L^2`` of both accelerations."""
        return (
            self.pole_moment * self.total_mass
            + self.mass_pole * self.mass_cart * self.length**2
        )


def cart_pole_derivatives(
    parameters: CartPoleParameters,
    x: float,
    theta: float,
    x_dot: float,
    theta_dot: float,
    action: float,
) -> Tuple[float, float, float, float]:
    """Time derivatives of the cart-pole state.

    Returns:
        ``(dx, dtheta, dx_dot, dtheta_dot)``.
    """
    p = parameters
    denom = p.denominator
    inertia = p.pole_moment + p.mass_pole * p.length**2

    x_acc = (
        -inertia * p.friction * x_dot
        + theta * p.gravity * p.mass_pole**2 * p.length**2
        + action * inertia
    ) / denom
    theta_acc = (
        p.mass_pole * p.length * p.friction * x_dot
        + theta * p.gravity * p.mass_pole * p.length * p.total_mass
        + action * p.mass_pole * p.length
    ) / denom

    return x_dot, theta_dot, x_acc, theta_acc


def is_out_of_bounds(parameters: CartPoleParameters, x: float, theta: float) -> bool:
    """Whether the cart or the pole left the valid operating envelope."""
    return (
        x < -parameters.x_threshold
        or x > parameters.x_threshold
        or theta < -parameters.theta_threshold
        or theta > parameters.theta_threshold
    )


class CartPole(Node):
    """Cart-pole system simulated with a fixed-step RK4 integrator."""

    # Half-widths of the uniform ranges used by randomize_state.
    random_state_half_widths = np.array([0.5, 0.5, 6 / 360 * 2 * np.pi, 0.25])

    def __init__(
        self,
        step_size: float = 0.02,
        parameters: Optional[CartPoleParameters] = None,
        seed: Optional[int] = None,
        name: str = "cart_pole",
    ) -> None:
        """Initialize the CartPole node.

        Args:
            step_size: Integration timestep ``dt``.
            parameters: Physical constants, defaults to ``CartPoleParameters()``.
            seed: Seed of the random generator used for state randomization.
            name: Node name.
        """
        super().__init__(step_size=step_size, is_continuous=True, name=name)
        self.parameters = parameters or CartPoleParameters()
        self.rng = np.random.default_rng(seed)
        self.action = 0.0
        self.state = self.define_variable(
            "state",
            value=np.zeros(4),
            shape=(4,),
            reset_modifier=self._perturb_state,
        )
        self.randomize_state()

    def _perturb_state(self, state: NumericArray) -> NumericArray:
        half_widths = self.random_state_half_widths
        return state + self.rng.uniform(-half_widths, half_widths)

    def randomize_state(self) -> None:
        """Draw a random state near the upright equilibrium."""
        self.state.reset()

    def set_state(
        self, x: float, x_dot: float, theta: float, theta_dot: float
    ) -> None:
        state = np.array([x, x_dot, theta, theta_dot], dtype=float)
        if not np.all(np.isfinite(state)):
            raise ValueError(f"State must be finite, got {state}")
        self.state.value = state

    def get_state(self) -> CartPoleStateTuple:
        """Return ``(x, x_dot, theta, theta_dot)``."""
        x, x_dot, theta, theta_dot = self.state.value
        return float(x), float(x_dot), float(theta), float(theta_dot)

    @property
    def x(self) -> float:
        return float(self.state.value[0])

    @property
    def x_dot(self) -> float:
        return float(self.state.value[1])

    @property
    def theta(self) -> float:
        return float(self.state.value[2])

    @property
    def theta_dot(self) -> float:
        return float(self.state.value[3])

    def compute_derivatives(
        self, x: float, theta: float, x_dot: float, theta_dot: float, action: float
    ) -> Tuple[float, float, float, float]:
        """Return ``(dx, dtheta, dx_dot, dtheta_dot)`` at the given point."""
        return cart_pole_derivatives(self.parameters, x, theta, x_dot, theta_dot, action)

    def state_transition_map(self, x: NumericArray, u: float) -> NumericArray:
        """Right-hand side of the ODE in the ``(x, x_dot, theta, theta_dot)`` layout."""
        dx, dtheta, dx_dot, dtheta_dot = self.compute_derivatives(
            x[0], x[2], x[1], x[3], u
        )
        return np.array([dx, dx_dot, dtheta, dtheta_dot])

    def advance(self, action: float) -> bool:
        """Integrate one timestep with ``action`` held constant.

        Returns:
            Whether the system is in a terminal state after the step.
        """
        action = float(action)
        if not np.isfinite(action):
            raise ValueError(f"Action must be finite, got {action}")
        self.action = action
        self.state.value = runge_kutta_4(
            lambda state: self.state_transition_map(state, action),
            self.state.value,
            self.step_size,
        )
        return self.is_terminal()

    def step(self) -> None:
        """Advance with the last applied action."""
        self.advance(self.action)

    def bump(self, direction: Optional[int] = None) -> bool:
        """Apply a one-step impulse of magnitude ``force_mag``.

        Args:
            direction: Sign of the impulse; random if not given.

        Returns:
            Whether the system is in a terminal state after the step.
        """
        if direction is None:
            direction = 1 if self.rng.random() < 0.5 else -1
        elif direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")
        force = direction * self.parameters.force_mag
        logger.debug(f"{self.name} | bump with force {force:.3f}")
        return self.advance(force)

    def is_terminal(self) -> bool:
        """Whether ``x`` or ``theta`` went beyond its threshold."""
        return is_out_of_bounds(self.parameters, self.x, self.theta)

    def reset(self, *, apply_reset_modifier: bool = True) -> None:
        """Reset the state, randomized unless ``apply_reset_modifier`` is False."""
        super().reset(apply_reset_modifier=apply_reset_modifier)
        self.action = 0.0
