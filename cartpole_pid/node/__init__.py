"""Node system: variables, nodes and the simulation loop."""
