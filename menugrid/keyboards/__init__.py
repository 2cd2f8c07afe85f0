from .button import Button, ButtonType, Requirement
from .grid import ButtonGrid
from .range import ButtonBuilderMixin, MenuRange
from .tokens import CallbackTokenFactory


__all__ = [
    'Button',
    'ButtonBuilderMixin',
    'ButtonGrid',
    'ButtonType',
    'CallbackTokenFactory',
    'MenuRange',
    'Requirement',
]
