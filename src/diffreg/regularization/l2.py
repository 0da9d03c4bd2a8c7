import numpy as np

from diffreg import DTYPE_NP

from diffreg.vectors import dense_coefficients

from diffreg.regularization import DifferentiableRegularization


# ==========================================================================
# Helpers
# ==========================================================================

def running_sum(terms):
    """
    Add up the terms one after the other, from first to last.
    """
    if terms.size == 0:
        return 0.0
    return np.cumsum(terms)[-1]


# ==========================================================================
# L2 regularization
# ==========================================================================

class L2Regularization(DifferentiableRegularization):
    """
    The L2 regularization penalty, `0.5 * reg_param * beta dot beta`.

    Parameters
    ----------
    reg_param : `float`
        The magnitude of the regularization.
    should_apply : `Callable[[int], bool]`
        Whether a coefficient index is regularized.
        Usually the intercept is not.
    features_std : `Callable[[int], float]`, optional
        Maps a coefficient index to the standard deviation of its feature.
        Training always works on standardized features, so if the data was
        not standardized up front, each coefficient is penalized by the
        inverse of its feature variance to get back the same objective.
        Leave it as `None` when the features were standardized.
        Defaults to `None`.
    name : `str`, optional
        The name of the term.
    """
    def __init__(self, reg_param, should_apply, features_std=None, name=None):
        super().__init__(reg_param, name)
        self._should_apply = should_apply
        self._features_std = features_std

    @property
    def should_apply(self):
        """
        The function that decides which coefficient indices are regularized.
        """
        return self._should_apply

    @property
    def features_std(self):
        """
        The function mapping a coefficient index to a feature standard deviation.
        """
        return self._features_std

    def calculate(self, coefficients):
        """
        Compute the L2 penalty value and its gradient at some coefficients.

        Parameters
        ----------
        coefficients : `array_like`
            A dense vector of coefficients.

        Returns
        -------
        value : `float`
            The penalty value.
        gradient : `np.ndarray`
            A new array with the gradient of the penalty.
            It is zero at the indices that are not regularized.

        Raises
        ------
        UnsupportedRepresentationError
            If the coefficients are sparse.
        """
        coefficients = dense_coefficients(coefficients)
        reg_param = self.reg_param

        gradient = np.zeros(len(coefficients), dtype=DTYPE_NP)
        indices = [j for j in range(len(coefficients)) if self.should_apply(j)]
        if not indices:
            return 0.0, gradient

        if self.features_std is not None:
            # zero-variance features are not penalized
            stds = np.array([self.features_std(j) for j in indices], dtype=DTYPE_NP)
            indices = np.asarray(indices)[stds != 0.0]
            stds = stds[stds != 0.0]

            coefs = coefficients[indices]
            temp = coefs / (stds * stds)
            total = running_sum(coefs * temp)
            gradient[indices] = reg_param * temp
        else:
            coefs = coefficients[indices]
            total = running_sum(coefs * coefs)
            gradient[indices] = coefs * reg_param

        return float(0.5 * reg_param * total), gradient
