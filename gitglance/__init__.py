"""Building blocks for a terminal git diff reviewer: styles, picker, popups, highlighting and patch parsing."""

__version__ = "0.1.0"