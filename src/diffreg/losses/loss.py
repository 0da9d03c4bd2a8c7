from time import perf_counter

import numpy as np

from jax import jit
from jax import value_and_grad

from diffreg import DTYPE_NP

from diffreg.regularization import DifferentiableRegularization


# ==========================================================================
# Regularized loss
# ==========================================================================

class RegularizedLoss:
    """
    A base loss function plus regularization terms.

    Parameters
    ----------
    loss_fn : `Callable`
        The base loss. It takes a coefficient vector and returns a tuple
        with the loss value and its gradient.
    regularizers : `DifferentiableRegularization`
        The regularization terms added to the base loss.
    name : `str`, optional
        The name of the loss.

    Notes
    -----
    A call returns the pair `(value, gradient)`, so a regularized loss can be
    handed to `scipy.optimize.minimize` with `jac=True`.
    """
    def __init__(self, loss_fn, *regularizers, name=None):
        self.loss_fn = loss_fn
        self._terms_regularization = None
        self.terms_regularization = regularizers
        self.name = name or self.__class__.__name__

    @property
    def terms_regularization(self):
        """
        The regularization terms in the loss function.
        """
        return self._terms_regularization

    @terms_regularization.setter
    def terms_regularization(self, terms):
        for term in terms:
            if not isinstance(term, DifferentiableRegularization):
                raise TypeError(f"{term} is not a differentiable regularization term!")
        self._terms_regularization = list(terms)

    def number_of_regularizers(self):
        """
        The total number of regularization terms in the loss.
        """
        return len(self.terms_regularization)

    def calculate(self, coefficients):
        """
        Compute the value and the gradient of the regularized loss.
        """
        loss_val, grad_val = self.loss_fn(coefficients)
        loss_val = float(loss_val)
        grad_val = np.array(grad_val, dtype=DTYPE_NP)

        for reg_term in self.terms_regularization:
            reg_val, reg_grad = reg_term.calculate(coefficients)
            if reg_grad.shape != grad_val.shape:
                msg = f"Gradient of {reg_term.name} has shape {reg_grad.shape}, but the loss gradient has shape {grad_val.shape}"
                raise ValueError(msg)
            loss_val = loss_val + reg_val
            grad_val += reg_grad

        return loss_val, grad_val

    def __call__(self, coefficients):
        return self.calculate(coefficients)

    def warmup(self, coefficients):
        """
        Evaluate the loss once and report on the starting point.
        """
        print("Warming up the pressure cooker...")
        print(f"\tRegularizers: {self.number_of_regularizers()}")
        start_time = perf_counter()
        loss_val, grad_val = self.calculate(coefficients)
        print(f"\tLoss and grad warmup time: {(perf_counter() - start_time):.4} seconds")
        print(f"\tInitial loss value: {loss_val:.4}")
        print(f"\tInitial gradient norm: {np.linalg.norm(grad_val):.4}")
        assert np.sum(np.isnan(grad_val)) == 0, "NaNs found in gradient calculation!"

        return loss_val, grad_val


# ==========================================================================
# Base losses
# ==========================================================================

def value_and_grad_jax(fn, jit_fn=True):
    """
    Turn a scalar jax function into a loss that returns its value and gradient.

    The output is converted to a python float and a float64 numpy array,
    which is what scipy and the regularization terms expect.
    """
    loss_and_grad_fn = value_and_grad(fn)
    if jit_fn:
        loss_and_grad_fn = jit(loss_and_grad_fn)

    def loss_fn(coefficients):
        loss_val, grad_val = loss_and_grad_fn(coefficients)
        return float(loss_val), np.asarray(grad_val, dtype=DTYPE_NP)

    return loss_fn
