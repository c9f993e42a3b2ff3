"""Interactive command-line personal task tracker."""

__version__ = "0.1.0"
