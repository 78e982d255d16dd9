"""
Centralized UI constants for task graph rendering.

Symbols are colorblind-friendly: state is never conveyed by color alone.
"""

SYMBOLS = {
    "unstarted": "· ",
    "in_flight": "🔄 ",
    "settled_ok": "[bold green]✓[/bold green] ",
    "settled_err": "[bold red]![/bold red] ",
    "faulted": "[bold red]✗[/bold red] ",
    "shared": "↺ ",
}

ASCII_SYMBOLS = {
    "unstarted": "- ",
    "in_flight": "~ ",
    "settled_ok": "+ ",
    "settled_err": "! ",
    "faulted": "x ",
    "shared": "^ ",
}

STYLE = {
    "header": "bold cyan",
    "label": "cyan",
    "shared": "dim",
    "error": "red",
}
