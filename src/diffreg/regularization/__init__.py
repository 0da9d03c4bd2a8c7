from .regularization import *  # noqa F403
from .l2 import *  # noqa F403
from .lookups import *  # noqa F403


__all__ = [name for name in dir() if not name.startswith('_')]
