"""
********************************************************************************
diffreg
********************************************************************************

.. currentmodule:: diffreg


.. toctree::
    :maxdepth: 1


"""

import os

import numpy as np

import jax
import jax.numpy as jnp


__author__ = ["Rafael Pastrana"]
__copyright__ = "Rafael Pastrana"
__license__ = "MIT License"
__email__ = "arpastrana@princeton.edu"
__version__ = "0.1.0"


HERE = os.path.dirname(__file__)

HOME = os.path.abspath(os.path.join(HERE, "../../"))

__all__ = ["HOME", "DTYPE_NP", "DTYPE_JAX"]

# config.py
# define floating point precision
DTYPE_NP = np.float64
DTYPE_JAX = jnp.float64

# this only works on startup!
if DTYPE_JAX == jnp.float64 or DTYPE_NP == np.float64:
    jax.config.update("jax_enable_x64", True)
