"""Memory nodes."""

from cartpole_pid.node.memory.buffer import DataBuffer

__all__ = ["DataBuffer"]
