import pytest

import numpy as np
import jax.numpy as jnp

from scipy.optimize import minimize

from diffreg.losses import RegularizedLoss
from diffreg.losses import value_and_grad_jax

from diffreg.regularization import DifferentiableRegularization
from diffreg.regularization import L2Regularization
from diffreg.regularization import apply_all
from diffreg.regularization import apply_features


def create_regression(num_samples=50, num_features=3, seed=0):
    """
    Create a small least squares problem.
    """
    rng = np.random.default_rng(seed)
    X = rng.normal(size=(num_samples, num_features))
    w = rng.normal(size=num_features)
    y = X @ w + 0.1 * rng.normal(size=num_samples)
    return X, y


def least_squares(X, y):
    """
    A least squares loss with its gradient.
    """
    def loss_fn(w):
        residual = X @ w - y
        return 0.5 * np.sum(residual ** 2), X.T @ residual

    return loss_fn


def test_regularized_loss_adds_terms():
    """
    Test that the penalty is added to the value and the gradient of the base loss.
    """
    X, y = create_regression()
    w = np.array([1.0, -2.0, 0.5])
    loss_fn = least_squares(X, y)
    reg = L2Regularization(2.0, apply_all())

    loss = RegularizedLoss(loss_fn, reg)
    value, gradient = loss(w)
    value_base, gradient_base = loss_fn(w)

    assert np.allclose(value, value_base + 0.5 * 2.0 * np.sum(w ** 2))
    assert np.allclose(gradient, gradient_base + 2.0 * w)


def test_regularized_loss_many_terms():
    """
    Test that two regularization terms add up.
    """
    X, y = create_regression()
    w = np.array([1.0, -2.0, 0.5])
    loss_fn = least_squares(X, y)
    reg_a = L2Regularization(1.0, apply_all())
    reg_b = L2Regularization(3.0, apply_all())

    loss = RegularizedLoss(loss_fn, reg_a, reg_b)
    loss_single = RegularizedLoss(loss_fn, L2Regularization(4.0, apply_all()))

    assert loss.number_of_regularizers() == 2
    value, gradient = loss(w)
    value_single, gradient_single = loss_single(w)
    assert np.allclose(value, value_single)
    assert np.allclose(gradient, gradient_single)


def test_regularized_loss_without_terms():
    """
    Test that a loss without regularization terms is the base loss.
    """
    X, y = create_regression()
    w = np.array([1.0, -2.0, 0.5])
    loss_fn = least_squares(X, y)

    loss = RegularizedLoss(loss_fn)
    value, gradient = loss(w)
    value_base, gradient_base = loss_fn(w)

    assert loss.number_of_regularizers() == 0
    assert value == value_base
    assert np.array_equal(gradient, gradient_base)


def test_regularized_loss_rejects_other_terms():
    """
    Test that only differentiable regularization terms are accepted.
    """
    X, y = create_regression()
    with pytest.raises(TypeError):
        RegularizedLoss(least_squares(X, y), lambda w: 0.0)


def test_regularized_loss_shape_mismatch():
    """
    Test that a penalty gradient of the wrong length is reported.
    """
    class ShortRegularization(DifferentiableRegularization):
        def calculate(self, coefficients):
            return 0.0, np.zeros(1)

    X, y = create_regression()
    loss = RegularizedLoss(least_squares(X, y), ShortRegularization(1.0))
    with pytest.raises(ValueError):
        loss(np.zeros(3))


def test_abstract_calculate():
    """
    Test that the base regularization term does not compute anything.
    """
    reg = DifferentiableRegularization(1.0)
    with pytest.raises(NotImplementedError):
        reg.calculate(np.zeros(3))


def test_value_and_grad_jax():
    """
    Test that a jax loss matches its hand-written counterpart.
    """
    X, y = create_regression()
    w = np.array([1.0, -2.0, 0.5])

    def loss_jax(w):
        return 0.5 * jnp.sum(jnp.square(X @ w - y))

    loss_fn = value_and_grad_jax(loss_jax)
    value, gradient = loss_fn(w)
    value_np, gradient_np = least_squares(X, y)(w)

    assert isinstance(value, float)
    assert gradient.dtype == np.float64
    assert np.allclose(value, value_np)
    assert np.allclose(gradient, gradient_np)


def test_warmup(capsys):
    """
    Test the report on the starting point of a regularized loss.
    """
    X, y = create_regression()
    loss = RegularizedLoss(least_squares(X, y), L2Regularization(1.0, apply_all()))
    value, gradient = loss.warmup(np.zeros(3))

    out = capsys.readouterr().out
    assert "Regularizers: 1" in out
    assert "Initial loss value" in out
    assert np.allclose(value, 0.5 * np.sum(y ** 2))


def test_ridge_lbfgsb():
    """
    Test that minimizing a regularized least squares loss finds the ridge solution.
    """
    reg_param = 5.0
    X, y = create_regression(num_features=4)
    loss = RegularizedLoss(least_squares(X, y), L2Regularization(reg_param, apply_all()))

    res = minimize(fun=loss, jac=True, x0=np.zeros(4), method="L-BFGS-B", tol=1e-12)

    w_ridge = np.linalg.solve(X.T @ X + reg_param * np.eye(4), X.T @ y)
    assert np.allclose(res.x, w_ridge, atol=1e-5), f"w:\n{res.x}\nw_ridge:\n{w_ridge}"


def test_ridge_intercept_lbfgsb():
    """
    Test that an unregularized intercept is fitted freely.
    """
    reg_param = 5.0
    num_features = 3
    X, y = create_regression(num_features=num_features)
    y = y + 10.0
    X1 = np.hstack((X, np.ones((X.shape[0], 1))))

    loss_fn = value_and_grad_jax(lambda w: 0.5 * jnp.sum(jnp.square(X1 @ w - y)))
    reg = L2Regularization(reg_param, apply_features(num_features))
    loss = RegularizedLoss(loss_fn, reg)

    res = minimize(fun=loss, jac=True, x0=np.zeros(num_features + 1), method="L-BFGS-B", tol=1e-12)

    penalty = reg_param * np.eye(num_features + 1)
    penalty[-1, -1] = 0.0
    w_ridge = np.linalg.solve(X1.T @ X1 + penalty, X1.T @ y)
    assert np.allclose(res.x, w_ridge, atol=1e-5), f"w:\n{res.x}\nw_ridge:\n{w_ridge}"
