"""Closed-loop simulation of a cart-pole stabilized by a PID controller."""

from typing import List, Optional

from cartpole_pid.node.base import Node
from cartpole_pid.node.classic_control.controllers.pid import PIDController
from cartpole_pid.node.classic_control.envs.continuous.cart_pole import CartPole
from cartpole_pid.node.logging import Clock, Logger, StepCounter
from cartpole_pid.node.memory.buffer import DataBuffer
from cartpole_pid.utils.logger import logger


class Simulation:
    """Explicit tick loop wiring a cart-pole to a PID controller.

    One tick reads the pole angle, feeds it to the controller and advances
    the cart-pole with the controller output. The loop halts once the
    cart-pole reaches a terminal state; ``reset`` starts a new episode.

    Args:
        cart_pole: Controlled system, a new ``CartPole`` by default.
        controller: PID controller, by default tuned with kp=20, ki=0, kd=10.
        step_size: Tick period of the default cart-pole, 0.02 if not given.
            Must equal ``cart_pole.step_size`` when both are given.
        log_cooldown: Simulated seconds between tick logs, None disables them.
        buffer_size: Capacity of the history buffer.
        seed: Seed for the default cart-pole; cannot be combined with ``cart_pole``.
    """

    def __init__(
        self,
        cart_pole: Optional[CartPole] = None,
        controller: Optional[PIDController] = None,
        step_size: Optional[float] = None,
        log_cooldown: Optional[float] = None,
        buffer_size: int = 1000,
        seed: Optional[int] = None,
    ) -> None:
        if cart_pole is None:
            cart_pole = CartPole(
                step_size=0.02 if step_size is None else step_size, seed=seed
            )
        elif seed is not None:
            raise ValueError("seed only applies to the default cart-pole")
        elif step_size is not None and step_size != cart_pole.step_size:
            raise ValueError(
                f"step_size {step_size} does not match "
                f"cart-pole step size {cart_pole.step_size}"
            )
        self.cart_pole = cart_pole
        self.controller = controller or PIDController(
            step_size=self.cart_pole.step_size
        )
        if self.controller.step_size != self.cart_pole.step_size:
            raise ValueError(
                f"Controller step size {self.controller.step_size} does not match "
                f"cart-pole step size {self.cart_pole.step_size}"
            )

        fundamental_step_size = self.cart_pole.step_size
        self.clock = Clock(fundamental_step_size)
        self.step_counter = StepCounter(fundamental_step_size)
        self.buffer = DataBuffer(
            buffer_size=buffer_size, step_size=fundamental_step_size
        )
        self.logger = (
            Logger(
                self.clock,
                {
                    f"{self.cart_pole.name}.state": lambda: self.cart_pole.state.value,
                    f"{self.controller.name}.control_signal": self.controller.get_output,
                },
                cooldown=log_cooldown,
            )
            if log_cooldown is not None
            else None
        )
        self.done = False

    @property
    def nodes(self) -> List[Node]:
        nodes: List[Node] = [
            self.cart_pole,
            self.controller,
            self.clock,
            self.step_counter,
            self.buffer,
        ]
        if self.logger is not None:
            nodes.append(self.logger)
        return nodes

    @property
    def time(self) -> float:
        return self.clock.time.value

    @property
    def n_steps(self) -> int:
        return self.step_counter.counter.value

    def _after_advance(self, done: bool) -> bool:
        self.clock.step()
        self.step_counter.step()
        self.buffer.record(
            self.time, self.cart_pole.state.value, self.controller.get_output()
        )
        if self.logger is not None:
            self.logger.step()
        if done:
            logger.warning(
                f"{self.cart_pole.name} failed at t={self.time:.3f} "
                f"after {self.n_steps} steps: state={self.cart_pole.get_state()}"
            )
        self.done = done
        return done

    def step(self) -> bool:
        """Run one control tick.

        Returns:
            Whether the cart-pole reached a terminal state.
        """
        if self.done:
            raise RuntimeError("Simulation is done, call reset() to start over")
        self.controller.update(self.cart_pole.theta)
        return self._after_advance(
            self.cart_pole.advance(self.controller.get_output())
        )

    def run(self, n_steps: int) -> int:
        """Tick until ``n_steps`` ticks ran or the cart-pole fails.

        Returns:
            Number of ticks executed.
        """
        executed = 0
        while executed < n_steps and not self.done:
            self.step()
            executed += 1
        return executed

    def bump(self, direction: Optional[int] = None) -> bool:
        """Push the cart with a fixed-magnitude impulse instead of a control tick."""
        if self.done:
            raise RuntimeError("Simulation is done, call reset() to start over")
        return self._after_advance(self.cart_pole.bump(direction))

    def update_gains(self, kp: float, ki: float, kd: float) -> None:
        """Retune the controller; clears its integral and derivative history."""
        self.controller.reset(kp, ki, kd)

    def reset(self) -> None:
        """Randomize the cart-pole and clear controller and history."""
        for node in self.nodes:
            node.reset()
        self.done = False
        logger.info(
            f"Simulation reset: {self.cart_pole.name} state={self.cart_pole.get_state()}"
        )
