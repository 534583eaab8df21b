"""A falling-block puzzle game with three-cell pieces, a canvas and a joystick driver."""

__version__ = "3.0.0"
__all__ = ["__version__"]