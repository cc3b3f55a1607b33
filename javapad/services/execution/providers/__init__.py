"""
Execution Providers - Auto-registered provider classes.
"""

# Import all providers to trigger @register_provider decorators
from .base_provider import BaseExecutionProvider
from .judge0 import Judge0Provider
from .piston import PistonProvider

__all__ = [
    "BaseExecutionProvider",
    "Judge0Provider",
    "PistonProvider",
]
