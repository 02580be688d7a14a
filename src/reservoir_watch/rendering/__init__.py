"""
Rendering collaborators for reservoir watch.
"""

from .base import ChartHandle, Renderer
from .console import ConsoleRenderer, TextChart, format_number

__all__ = [
    "ChartHandle",
    "Renderer",
    "ConsoleRenderer",
    "TextChart",
    "format_number",
]
