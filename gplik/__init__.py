# gplik/__init__.py

from . import config
from . import num
from . import errors
from . import core
from . import kernel
from .core import (
    Likelihood,
    PlainLikelihood,
    LogLikelihood,
    get_likelihood,
    GaussianProcess,
)
from .errors import (
    LikelihoodError,
    LikelihoodNotImplementedError,
    NumericalError,
    DimensionError,
)

__version__ = config.__version__

__all__ = [
    "num",
    "kernel",
    "core",
    "Likelihood",
    "PlainLikelihood",
    "LogLikelihood",
    "get_likelihood",
    "GaussianProcess",
    "LikelihoodError",
    "LikelihoodNotImplementedError",
    "NumericalError",
    "DimensionError",
    "__version__",
]
