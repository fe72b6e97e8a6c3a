"""Variable implementation module."""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from typing import Optional, Any

import numpy as np

from .types import (
    Value,
    Metadata,
    Shape,
    NodeName,
    VarName,
    default_metadata,
)


@dataclass(slots=True)
class Variable:
    """Named value owned by a node, with an initial value to reset to."""

    name: VarName
    metadata: Metadata = field(default_factory=default_metadata)
    _node_name: NodeName = field(default="")

    def __post_init__(self) -> None:
        """Initialize metadata with initial value if not present."""
        self.metadata.setdefault("current_value", None)
        if (
            "initial_value" not in self.metadata
            or self.metadata["initial_value"] is None
        ):
            self.metadata["initial_value"] = deepcopy(self.metadata["current_value"])

    @property
    def value(self) -> Optional[Value]:
        """Get the current value."""
        val = self.metadata["current_value"]
        return (
            val
            if isinstance(val, (np.ndarray, float, int, bool, np.floating))
            or val is None
            else None
        )

    @value.setter
    def value(self, val: Optional[Value]) -> None:
        """Set the current value."""
        self.metadata["current_value"] = val

    @property
    def initial_value(self) -> Optional[Value]:
        """Get the value restored on reset."""
        return self.metadata["initial_value"]

    def reset(self, *, apply_reset_modifier: bool = True) -> None:
        """Reset variable to its initial state.

        If a reset modifier is registered it receives a copy of the initial
        value and its result becomes the current value.
        """
        if (
            apply_reset_modifier
            and "reset_modifier" in self.metadata
            and self.metadata["reset_modifier"] is not None
            and callable(self.metadata["reset_modifier"])
        ):
            self.metadata["current_value"] = deepcopy(
                self.metadata["reset_modifier"](
                    deepcopy(self.metadata["initial_value"])
                )
            )
        else:
            self.metadata["current_value"] = deepcopy(self.metadata["initial_value"])

    @property
    def full_name(self) -> str:
        """Get fully qualified name."""
        return f"{self.node_name}.{self.name}"

    def set_new_value(self, value: Any) -> None:
        """Set new value and update initial value."""
        self.value = value
        self.metadata["initial_value"] = deepcopy(value)

    @property
    def shape(self) -> Optional[Shape]:
        """Infer shape from metadata or value."""
        shape_val = self.metadata["shape"]
        if shape_val and isinstance(shape_val, tuple):
            return shape_val

        if isinstance(self.value, np.ndarray):
            return tuple(int(x) for x in self.value.shape)

        if isinstance(self.value, (int, float, bool)):
            return (1,)

        return None

    @property
    def node_name(self) -> str:
        """Get node name."""
        return self._node_name
