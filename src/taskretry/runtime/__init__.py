"""Runtime layer: retry policies and the engines that apply them."""

from .retry import *  # noqa: F403
from .retry import __all__ as _retry_all

__all__ = [*_retry_all]
