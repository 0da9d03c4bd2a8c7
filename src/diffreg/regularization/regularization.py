# ==========================================================================
# Differentiable regularization
# ==========================================================================

class DifferentiableRegularization:
    """
    The base class for a differentiable regularization term.

    A regularization term maps a vector of coefficients to a penalty value
    and to the gradient of that penalty, so that both can be summed with the
    value and the gradient of a base loss function.

    Parameters
    ----------
    reg_param : `float`
        The magnitude of the regularization penalty.
    name : `str`, optional
        The name of the term. Defaults to the class name.
    """
    def __init__(self, reg_param, name=None):
        self._reg_param = float(reg_param)
        self.name = name or self.__class__.__name__

    @property
    def reg_param(self):
        """
        The magnitude of the regularization penalty.
        """
        return self._reg_param

    def calculate(self, coefficients):
        """
        Compute the penalty value and its gradient at some coefficients.
        """
        raise NotImplementedError

    def value(self, coefficients):
        """
        The penalty value at some coefficients.
        """
        value, _ = self.calculate(coefficients)
        return value

    def gradient(self, coefficients):
        """
        The gradient of the penalty at some coefficients.
        """
        _, gradient = self.calculate(coefficients)
        return gradient

    def __call__(self, coefficients):
        return self.value(coefficients)

    def __repr__(self):
        return f"{self.name}(reg_param={self.reg_param})"
