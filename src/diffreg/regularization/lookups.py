"""
Index lookups to configure a regularization term.
"""
import numpy as np

from diffreg import DTYPE_NP


# ==========================================================================
# Apply predicates
# ==========================================================================

def apply_all():
    """
    Regularize every coefficient.
    """
    def should_apply(j):
        return True

    return should_apply


def apply_features(num_features, num_coefficient_sets=1):
    """
    Regularize the feature coefficients but not the intercepts.

    Parameters
    ----------
    num_features : `int`
        The number of features.
    num_coefficient_sets : `int`, optional
        The number of coefficient sets, e.g. one per class in a multinomial model.
        The intercepts are stored after the `num_features * num_coefficient_sets`
        feature coefficients.
        Defaults to `1`.
    """
    num_coefficients = num_features * num_coefficient_sets

    def should_apply(j):
        return 0 <= j < num_coefficients

    return should_apply


def apply_except(indices):
    """
    Regularize every coefficient except the ones at the given indices.
    """
    excluded = frozenset(indices)

    def should_apply(j):
        return j not in excluded

    return should_apply


# ==========================================================================
# Feature scales
# ==========================================================================

def features_std_lookup(features_std, num_coefficient_sets=1):
    """
    Map a coefficient index to the standard deviation of its feature.

    Parameters
    ----------
    features_std : `array_like`
        The standard deviation of every feature.
    num_coefficient_sets : `int`, optional
        The number of coefficient sets laid out in column major order, so that
        index `j` belongs to feature `j // num_coefficient_sets`.
        Defaults to `1`.

    Notes
    -----
    Indices past the feature coefficients map to `0.0`, which excludes the
    intercepts from a rescaled penalty.
    """
    stds = np.array(features_std, dtype=DTYPE_NP)
    stds.setflags(write=False)
    num_coefficients = stds.size * num_coefficient_sets

    def get_std(j):
        if 0 <= j < num_coefficients:
            return stds[j // num_coefficient_sets]
        return 0.0

    return get_std
