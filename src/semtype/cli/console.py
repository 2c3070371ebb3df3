"""
Shared Rich console and theme for the semtype CLI.
"""
from rich.console import Console
from rich.theme import Theme

custom_theme = Theme({
    "info": "blue",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "highlight": "bold blue",
    "muted": "dim",
    "type": "cyan",
    "pattern": "magenta",
    "table.header": "bold blue",
})

console = Console(theme=custom_theme, highlight=False)
