"""Domain types shared by every provider: errors and results."""

from .errors import BackendError, ContractViolationError, Error, UnimplementedError
from .results import Err, Ok, Result, error

__all__ = [
    "BackendError",
    "ContractViolationError",
    "Err",
    "Error",
    "Ok",
    "Result",
    "UnimplementedError",
    "error",
]
