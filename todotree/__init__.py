"""
todotree: Command-line nested todo lists with due and late deadlines.

Parent tasks derive their status from their children; tasks can be shown as
a nested outline or as a flat Late / Due / Complete listing.
"""

__version__ = "1.0.0"

# Import the main CLI app for entry point
from .cli import app

__all__ = ["app", "__version__"]
