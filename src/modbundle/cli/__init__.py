"""
Command-line front end for modbundle. Shared console lives here.
"""

from rich.console import Console

console = Console()
