"""
Dense and sparse coefficient vectors.
"""
import numpy as np

from scipy.sparse import issparse

from jax.experimental.sparse import JAXSparse

from diffreg import DTYPE_NP


# ==========================================================================
# Errors
# ==========================================================================

class UnsupportedRepresentationError(ValueError):
    """
    Raised when a coefficient vector comes in a representation we cannot regularize.
    """
    pass


# ==========================================================================
# Representations
# ==========================================================================

def is_sparse(coefficients):
    """
    Check whether a coefficient vector is stored in a sparse container.
    """
    return issparse(coefficients) or isinstance(coefficients, JAXSparse)


def dense_coefficients(coefficients):
    """
    Return a coefficient vector as a dense float array.

    Parameters
    ----------
    coefficients : `array_like`
        A dense vector: a list, a numpy array or a jax array.

    Returns
    -------
    coefficients : `np.ndarray`
        A flat float64 vector, a view on the input when no copy is needed.

    Notes
    -----
    Row and column vectors, such as the output of `toarray()` on a sparse
    row, are flattened.

    Raises
    ------
    UnsupportedRepresentationError
        If the coefficients live in a scipy or jax sparse container.
    ValueError
        If the coefficients are a matrix with more than one row and column.
    """
    if is_sparse(coefficients):
        raise UnsupportedRepresentationError("Sparse coefficients are not currently supported.")

    coefficients = np.asarray(coefficients, dtype=DTYPE_NP)
    if sum(dim != 1 for dim in coefficients.shape) > 1:
        raise ValueError(f"Coefficients must be a vector, but got an array of shape {coefficients.shape}")

    return np.ravel(coefficients)
