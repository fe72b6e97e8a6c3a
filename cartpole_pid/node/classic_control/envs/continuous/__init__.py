from cartpole_pid.node.classic_control.envs.continuous.cart_pole import (
    CartPole,
    CartPoleParameters,
    cart_pole_derivatives,
    is_out_of_bounds,
)

__all__ = ["CartPole", "CartPoleParameters", "cart_pole_derivatives", "is_out_of_bounds"]
