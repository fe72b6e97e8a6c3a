import logging
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from cartpole_pid import CartPole, PIDController, Simulation
from cartpole_pid.node.memory.buffer import DataBuffer
from cartpole_pid.utils import setup_console_logging


def dump_plot(buffer: DataBuffer, save_dir: str = "plots") -> Path:
    history = buffer.history()
    times = history["time"]
    states = history["state"]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8))
    ax1.plot(times, states[:, 0], label="x")
    ax1.plot(times, states[:, 2], label="theta")
    ax1.set_ylabel("State")
    ax1.legend()

    ax2.plot(times, history["control_signal"], label="control")
    ax2.set_xlabel("Time [s]")
    ax2.set_ylabel("Control")
    ax2.legend()

    path = Path(save_dir)
    path.mkdir(exist_ok=True)
    plt.savefig(path / "cartpole_pid.png")
    plt.close(fig)
    return path / "cartpole_pid.png"


setup_console_logging(logging.INFO)

n_steps = 500
step_size = 0.02

cart_pole = CartPole(step_size=step_size, seed=0)
pid = PIDController(kp=20, ki=1, kd=15, step_size=step_size)
simulation = Simulation(cart_pole, pid, log_cooldown=1.0)

simulation.run(n_steps // 2)
if not simulation.done:
    simulation.bump()
    simulation.run(n_steps // 2)

print(f"theta after {simulation.n_steps} steps: {np.degrees(cart_pole.theta):.3f} deg")
print(f"plot saved to {dump_plot(simulation.buffer)}")
