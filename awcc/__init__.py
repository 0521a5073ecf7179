"""Keyboard lighting and fan mode control for Dell G Series laptops."""

__version__ = "0.1.0"
__all__ = ["__version__"]