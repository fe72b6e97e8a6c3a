"""Test buffer functionality."""

import numpy as np
import pytest

from cartpole_pid.node.memory.buffer import DataBuffer


@pytest.fixture
def buffer():
    return DataBuffer(state_dimension=2, buffer_size=3, step_size=0.1)


def test_history_before_buffer_is_full(buffer):
    buffer.record(0.1, np.array([1.0, 2.0]), 0.5)
    buffer.record(0.2, np.array([3.0, 4.0]), -0.5)

    history = buffer.history()
    assert len(buffer) == 2
    np.testing.assert_allclose(history["time"], [0.1, 0.2])
    np.testing.assert_allclose(history["state"], [[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_allclose(history["control_signal"], [0.5, -0.5])


def test_history_wraps_around(buffer):
    for i in range(1, 6):
        buffer.record(float(i), np.array([i, -i]), 10.0 * i)

    history = buffer.history()
    assert len(buffer) == 3
    np.testing.assert_allclose(history["time"], [3.0, 4.0, 5.0])
    np.testing.assert_allclose(history["state"][:, 0], [3.0, 4.0, 5.0])
    np.testing.assert_allclose(history["control_signal"], [30.0, 40.0, 50.0])


def test_history_is_a_copy(buffer):
    buffer.record(0.1, np.array([1.0, 2.0]), 0.5)
    buffer.history()["state"][0] = 100.0
    np.testing.assert_allclose(buffer.history()["state"][0], [1.0, 2.0])


def test_reset_clears_buffer(buffer):
    buffer.record(0.1, np.array([1.0, 2.0]), 0.5)
    buffer.reset()
    assert len(buffer) == 0
    assert buffer.history()["state"].shape == (0, 2)
    np.testing.assert_array_equal(buffer.state.value, np.zeros((3, 2)))


def test_invalid_buffer_size_raises_error():
    with pytest.raises(ValueError, match="buffer_size"):
        DataBuffer(buffer_size=0)
