from cartpole_pid.node.classic_control.controllers.pid import (
    PIDController,
    PIDGains,
    PIDMemory,
    pid_update,
)

__all__ = ["PIDController", "PIDGains", "PIDMemory", "pid_update"]
