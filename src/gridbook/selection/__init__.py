"""Selection and gesture handling."""

from .controller import SelectionController

__all__ = ["SelectionController"]
