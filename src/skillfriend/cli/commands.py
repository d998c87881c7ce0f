"""CLI commands for Skill Friend.

- serve: run the Web API with uvicorn
- setup: show backend configuration status and the .env template
"""

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from skillfriend.backend.errors import ConfigError
from skillfriend.backend.factory import validate_backend_config
from skillfriend.config.app_config import ENV_TEMPLATE, load_app_config
from skillfriend.core import content

app = typer.Typer(
    name="skillfriend",
    help="Skill Friend learning platform API.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the Web API."""
    config = load_app_config()
    try:
        validate_backend_config(config.backend.url, config.backend.anon_key)
        console.print("[green]✓ Supabase configured[/green]")
    except ConfigError as e:
        console.print(f"[yellow]⚠ Demo mode: {e.message}[/yellow]")

    uvicorn.run(
        "skillfriend.web.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def setup() -> None:
    """Check Supabase credentials and print the .env template."""
    config = load_app_config()

    try:
        validate_backend_config(config.backend.url, config.backend.anon_key)
    except ConfigError as e:
        console.print(f"[yellow]⚠ {content.SETUP_TITLE}[/yellow]")
        console.print(f"  [dim]reason:[/dim] {e.message}")
        console.print(f"\n{content.SETUP_DESCRIPTION}\n")
        for i, step in enumerate(content.SETUP_STEPS, start=1):
            console.print(f"  {i}. {step}")
        console.print(Panel(ENV_TEMPLATE, title=".env", expand=False))
        raise typer.Exit(code=1)

    console.print("[green]✓ Supabase configured[/green]")
    console.print(f"  [dim]url:[/dim] {config.backend.url}")


if __name__ == "__main__":
    app()
