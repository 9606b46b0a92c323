"""
Common utilities for the accelerator benchmark.
"""

from .errors import BackendError, BenchError, DecodeError, InvalidRequest, TransportError
from .operations import ALL_BACKENDS, Backend, Operation

__all__ = [
    'ALL_BACKENDS',
    'Backend',
    'BackendError',
    'BenchError',
    'DecodeError',
    'InvalidRequest',
    'Operation',
    'TransportError',
]
