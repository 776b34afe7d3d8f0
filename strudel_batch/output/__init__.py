"""Output layer - Export to text formats.

This layer renders analyzed music as:
- Strudel mini-notation patterns
"""

from .strudel import NotationRenderer, StrudelPattern, format_note

__all__ = [
    "NotationRenderer",
    "StrudelPattern",
    "format_note",
]
