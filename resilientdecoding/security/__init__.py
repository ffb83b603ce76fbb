"""
Resource limits for resilientdecoding.
"""

from .exceptions import SecurityError
from .limits import LimitValidator

__all__ = ["SecurityError", "LimitValidator"]
