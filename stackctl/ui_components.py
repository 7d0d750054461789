"""
stackctl - UI Components & Branding
Standardized headers and UI elements
"""

from rich.console import Console

BRAND = "stackctl"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    server: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized stackctl command header.

    Args:
        title: Main title (e.g., "Stacks", "Update Stack")
        server: Server base URL (if configured)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Update Stack",
            server="https://portainer.local:9443",
            details={"Stack": 12, "Env overrides": 2}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{BRAND}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if server:
        console.print(f"{prefix} Server: [{BRAND_COLOR}]{server}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]")

    console.print()
