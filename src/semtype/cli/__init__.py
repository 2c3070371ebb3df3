"""
semtype CLI module - shared console and commands.
"""
from semtype.cli.console import console, custom_theme
from semtype.cli.main import cli

__all__ = [
    'console',
    'custom_theme',
    'cli',
]
