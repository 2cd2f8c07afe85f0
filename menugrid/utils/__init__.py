from .callables import resolve
from .logging import configure_logging


__all__ = [
    'configure_logging',
    'resolve',
]
