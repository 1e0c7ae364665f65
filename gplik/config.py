# gplik/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_DTYPE_NAMES = ("float64", "float32")


class _GPLikConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = "float64"
        # logger lives in config
        self.logger = logging.getLogger("gplik")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return f"GPLikConfig(version={self.version}, dtype={self.dtype})"

    def __repr__(self):
        return f"<GPLikConfig version={self.version!r}, dtype={self.dtype!r}>"

    def update(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self


_config = _GPLikConfig()


def get_config():
    return _config


def _normalize_dtype_name(dtype):
    name = getattr(dtype, "__name__", None) or str(dtype)
    name = name.replace("numpy.", "")
    if name == "float":
        name = "float64"
    if name not in _DTYPE_NAMES:
        raise ValueError(f"dtype must be one of {_DTYPE_NAMES}, got {dtype!r}")
    return name


def init_dtype():
    """Idempotent. Read GPLIK_DTYPE once and store the working dtype."""
    env = os.environ.get("GPLIK_DTYPE")
    if env:
        _config.dtype = _normalize_dtype_name(env)
    return _config.dtype


def set_dtype(dtype):
    """Set the working floating-point type ('float64' or 'float32')."""
    _config.dtype = _normalize_dtype_name(dtype)


def get_dtype_name():
    return _config.dtype


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)


init_dtype()
