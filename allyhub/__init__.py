"""AllyHub - menu bar countdown timer and task list companion."""

__version__ = "0.1.0"
