"""lined - a small terminal line editor."""

from .buffer import TextBuffer
from .viewport import Viewport
from .controller import Controller
from .view import RenderDescriptor

__all__ = [
    'TextBuffer',
    'Viewport',
    'Controller',
    'RenderDescriptor',
]
