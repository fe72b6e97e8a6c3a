"""Classic control systems and controllers.

Environments:
    - Cart-pole (inverted pendulum on a cart) with force control

Controllers:
    - PID with setpoint tracking and live gain retuning

Example:
    ```python
    from cartpole_pid.node.classic_control import CartPole, PIDController

    cart_pole = CartPole(step_size=0.02)
    pid = PIDController(kp=20, ki=1, kd=15, step_size=0.02)

    while True:
        action = pid.update(cart_pole.theta)
        if cart_pole.advance(action):
            break
    ```
"""

from cartpole_pid.node.classic_control.envs.continuous import (
    CartPole,
    CartPoleParameters,
)
from cartpole_pid.node.classic_control.controllers import PIDController, PIDGains

__all__ = ["CartPole", "CartPoleParameters", "PIDController", "PIDGains"]
