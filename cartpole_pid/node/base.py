"""Base node implementation module."""

from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    Union,
    cast,
)

from cartpole_pid.node.core.variable import Variable
from cartpole_pid.node.core.types import MetadataKey, Shape, Value, default_metadata


class Node(ABC):
    """Base class for computational nodes.

    A node is a unit of computation that:
    - Manages its own variables
    - Can be reset to initial state
    - Executes computational steps
    """

    def __init__(
        self,
        *,
        step_size: Optional[float] = None,
        is_continuous: bool = False,
        name: Optional[str] = None,
    ) -> None:
        """Initialize node with configuration.

        Args:
            step_size: Time step for execution.
            is_continuous: Whether node represents continuous dynamics.
            name: Optional name override.
        """
        if step_size is not None and not step_size > 0:
            raise ValueError(f"step_size must be positive, got {step_size}")
        self._step_size = step_size
        self._is_continuous = is_continuous
        self._variables: List[Variable] = []

        if is_continuous and not hasattr(self, "state_transition_map"):
            raise ValueError(
                f"Continuous node {self.__class__.__name__} must implement state_transition_map"
            )

        self._name = name or self.__class__.__name__.lower()

    @abstractmethod
    def step(self) -> None:
        """Execute one computational step."""
        pass

    @property
    def variables(self) -> Sequence[Variable]:
        """Get list of node variables."""
        return self._variables

    @property
    def name(self) -> str:
        """Get node name."""
        return self._name

    def get_full_names(self) -> List[str]:
        """Get fully qualified names of all variables.

        Returns:
            List of strings in format 'node_name.variable_name'.
        """
        return [var.full_name for var in self._variables]

    def define_variable(
        self,
        name: str,
        value: Optional[Any] = None,
        metadata: Optional[Dict[str, Any]] = None,
        shape: Optional[tuple[int, ...]] = None,
        reset_modifier: Optional[Callable[[Any], Any]] = None,
    ) -> Variable:
        """Create and register a new variable."""
        base_meta = default_metadata()
        if metadata:
            typed_meta: Dict[MetadataKey, Union[Value, Shape, Callable[[Any], Any]]] = {
                cast(MetadataKey, k): v
                for k, v in metadata.items()
                if k in MetadataKey.__args__  # type: ignore
            }
            base_meta.update(typed_meta)
        if shape is not None:
            base_meta["shape"] = shape
        base_meta["current_value"] = value
        if reset_modifier is not None:
            base_meta["reset_modifier"] = reset_modifier
        var = Variable(name=name, metadata=base_meta, _node_name=self.name)
        self._variables.append(var)
        return var

    @property
    def step_size(self) -> Optional[float]:
        """Get step size."""
        return self._step_size

    @property
    def is_continuous(self) -> bool:
        """Get continuous flag."""
        return self._is_continuous

    def find_variable(self, name: str) -> Optional[Variable]:
        """Find variable by name."""
        return next((var for var in self._variables if var.name == name), None)

    def get_variable(self, name: str) -> Variable:
        """Get variable by name or raise error."""
        if var := self.find_variable(name):
            return var
        raise ValueError(f"Variable '{name}' not found in node '{self.name}'")

    def reset(self, *, apply_reset_modifier: bool = True) -> None:
        """Reset the node to its initial state.

        Args:
            apply_reset_modifier: Whether to apply reset modifiers of variables.
        """
        self._reset(apply_reset_modifier=apply_reset_modifier)

    def _reset(
        self,
        variables_to_reset: Optional[List[str]] = None,
        *,
        apply_reset_modifier: bool = True,
    ) -> None:
        """Internal reset implementation.

        Args:
            variables_to_reset: Optional list of variable names to reset. If None, resets all variables.
            apply_reset_modifier: Whether to apply reset modifiers of variables.
        """
        if variables_to_reset is None:
            variables_to_reset = [var.name for var in self._variables]
        for var_name in variables_to_reset:
            var = self.get_variable(var_name)
            var.reset(apply_reset_modifier=apply_reset_modifier)

    def __str__(self) -> str:
        """String representation."""
        class_repr = f"{self.__class__.__name__}({self.name})"
        return f"{class_repr}, variables={self._variables})"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return self.__str__()
