"""Error handling package."""

from .handlers import register_error_handlers, render_error

__all__ = ['register_error_handlers', 'render_error']
