"""Scientific keypad calculator: token expressions, evaluation, settings and a text session."""

__version__ = "1.0.0"
__all__ = ["__version__"]