"""
This __init__.py file makes the 'commands' directory a Python package.

Each module defines a handler for one CLI command. Handlers take a simple
args object (attributes mirror the CLI options) and let TaskTreeError
propagate; the typer layer turns it into an error message and exit code.
"""
