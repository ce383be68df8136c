"""A four-function calculator with memory slots, a calculation history and a Tk window."""

__version__ = "0.1.0"
__all__ = ["tokens", "evaluate", "calculator", "app"]