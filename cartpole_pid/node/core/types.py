"""Type definitions for the node system."""

from typing import Any, Callable, Dict, Literal, Tuple, TypeAlias, Union

import numpy as np

# Type for numeric arrays
NumericArray: TypeAlias = np.ndarray

# Type for variable shapes
Shape: TypeAlias = Union[Tuple[int, ...], None]

# Type for variable values
Value: TypeAlias = Union[NumericArray, float, int, bool, None]

# Type for metadata keys
MetadataKey: TypeAlias = Literal[
    "initial_value", "shape", "reset_modifier", "current_value"
]

# Type for variable metadata
Metadata: TypeAlias = Dict[
    MetadataKey, Union[Value, Shape, Callable[[Any], Any], None]
]

# Cart-pole state layout: (x, x_dot, theta, theta_dot)
CartPoleStateTuple: TypeAlias = Tuple[float, float, float, float]


def default_metadata() -> Metadata:
    """Create default metadata structure."""
    return {
        "initial_value": None,
        "shape": None,
        "reset_modifier": None,
        "current_value": None,
    }


# Type for node names
NodeName: TypeAlias = str

# Type for variable names
VarName: TypeAlias = str
