"""Built-in translation tables."""

from .en import ENGLISH
from .fr import FRENCH

__all__ = ["ENGLISH", "FRENCH"]
