"""Test cart-pole dynamics."""

import numpy as np
import pytest

from cartpole_pid.node.classic_control.envs.continuous import (
    CartPole,
    CartPoleParameters,
    cart_pole_derivatives,
)


@pytest.fixture
def cart_pole():
    cart_pole = CartPole(step_size=0.02, seed=0)
    cart_pole.set_state(0.0, 0.0, 0.0, 0.0)
    return cart_pole


def test_default_parameters():
    parameters = CartPoleParameters()
    assert parameters.total_mass == pytest.approx(0.7)
    assert parameters.theta_threshold == pytest.approx(np.radians(12))
    assert parameters.denominator == pytest.approx(0.0132)


@pytest.mark.parametrize(
    "field", ["mass_cart", "mass_pole", "length", "pole_moment", "x_threshold"]
)
def test_invalid_parameters_raise_error(field):
    with pytest.raises(ValueError, match=field):
        CartPoleParameters(**{field: 0.0})


def test_negative_friction_raises_error():
    with pytest.raises(ValueError, match="friction"):
        CartPoleParameters(friction=-0.1)


def test_derivatives_match_closed_form():
    p = CartPoleParameters()
    x_dot, theta, theta_dot, action = 0.3, 0.05, -0.2, 1.5
    denom = p.pole_moment * p.total_mass + p.mass_pole * p.mass_cart * p.length**2
    inertia = p.pole_moment + p.mass_pole * p.length**2

    dx, dtheta, dx_dot, dtheta_dot = cart_pole_derivatives(
        p, 1.0, theta, x_dot, theta_dot, action
    )

    assert dx == x_dot
    assert dtheta == theta_dot
    assert dx_dot == pytest.approx(
        (
            -inertia * p.friction * x_dot
            + theta * p.gravity * p.mass_pole**2 * p.length**2
            + action * inertia
        )
        / denom
    )
    assert dtheta_dot == pytest.approx(
        (
            p.mass_pole * p.length * p.friction * x_dot
            + theta * p.gravity * p.mass_pole * p.length * p.total_mass
            + action * p.mass_pole * p.length
        )
        / denom
    )


def test_compute_derivatives_does_not_touch_state(cart_pole):
    cart_pole.set_state(0.1, 0.2, 0.03, 0.4)
    cart_pole.compute_derivatives(1.0, 0.1, 1.0, 1.0, 5.0)
    assert cart_pole.get_state() == (0.1, 0.2, 0.03, 0.4)


def test_equilibrium_is_fixed_point(cart_pole):
    for _ in range(100):
        assert not cart_pole.advance(0.0)
    assert cart_pole.get_state() == (0.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("sign", [1.0, -1.0])
def test_theta_threshold_boundary(cart_pole, sign):
    threshold = cart_pole.parameters.theta_threshold
    eps = 1e-9

    cart_pole.set_state(0.0, 0.0, sign * (threshold + eps), 0.0)
    assert cart_pole.is_terminal()

    cart_pole.set_state(0.0, 0.0, sign * (threshold - eps), 0.0)
    assert not cart_pole.is_terminal()

    cart_pole.set_state(0.0, 0.0, sign * threshold, 0.0)
    assert not cart_pole.is_terminal()


@pytest.mark.parametrize("sign", [1.0, -1.0])
def test_x_threshold_boundary(cart_pole, sign):
    threshold = cart_pole.parameters.x_threshold
    eps = 1e-9

    cart_pole.set_state(sign * (threshold + eps), 0.0, 0.0, 0.0)
    assert cart_pole.is_terminal()

    cart_pole.set_state(sign * (threshold - eps), 0.0, 0.0, 0.0)
    assert not cart_pole.is_terminal()

    cart_pole.set_state(sign * threshold, 0.0, 0.0, 0.0)
    assert not cart_pole.is_terminal()


def test_advance_reports_terminal_state(cart_pole):
    cart_pole.set_state(2.39, 1.0, 0.0, 0.0)
    assert cart_pole.advance(0.0)
    assert cart_pole.x > cart_pole.parameters.x_threshold


def test_advance_rejects_non_finite_action(cart_pole):
    with pytest.raises(ValueError, match="finite"):
        cart_pole.advance(float("nan"))


def test_set_state_rejects_non_finite_values(cart_pole):
    with pytest.raises(ValueError, match="finite"):
        cart_pole.set_state(0.0, float("inf"), 0.0, 0.0)


def test_randomized_state_stays_near_equilibrium():
    cart_pole = CartPole(seed=42)
    half_widths = CartPole.random_state_half_widths
    for _ in range(50):
        cart_pole.randomize_state()
        state = np.array(cart_pole.get_state())
        assert np.all(np.abs(state) <= half_widths)
        assert not cart_pole.is_terminal()


def test_randomize_state_draws_new_values():
    cart_pole = CartPole(seed=1)
    first = cart_pole.get_state()
    cart_pole.randomize_state()
    assert not np.allclose(first, cart_pole.get_state())


def test_seed_makes_state_reproducible():
    assert CartPole(seed=7).get_state() == CartPole(seed=7).get_state()


def test_reset_without_modifier_returns_to_equilibrium():
    cart_pole = CartPole(seed=3)
    cart_pole.reset(apply_reset_modifier=False)
    assert cart_pole.get_state() == (0.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("direction", [1, -1])
def test_bump_pushes_in_given_direction(cart_pole, direction):
    cart_pole.bump(direction)
    assert np.sign(cart_pole.x_dot) == direction
    assert np.sign(cart_pole.theta_dot) == direction
    assert cart_pole.action == direction * cart_pole.parameters.force_mag


def test_bump_without_direction_uses_force_magnitude(cart_pole):
    reference = CartPole(step_size=0.02)
    reference.set_state(0.0, 0.0, 0.0, 0.0)
    reference.bump(1)

    cart_pole.bump()

    assert abs(cart_pole.x_dot) == pytest.approx(reference.x_dot)
    assert abs(cart_pole.action) == cart_pole.parameters.force_mag


def test_bump_rejects_invalid_direction(cart_pole):
    with pytest.raises(ValueError, match="direction"):
        cart_pole.bump(0)


def test_step_holds_last_action(cart_pole):
    reference = CartPole(step_size=0.02)
    reference.set_state(0.0, 0.0, 0.0, 0.0)
    reference.advance(0.5)
    reference.advance(0.5)

    cart_pole.advance(0.5)
    cart_pole.step()

    np.testing.assert_allclose(cart_pole.get_state(), reference.get_state())
