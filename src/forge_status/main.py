import typer

from forge_status.commands import deployment
from forge_status.config import get_settings
from forge_status.logging_config import setup_logging

app = typer.Typer(
    name="world-forge",
    help="Deploy World Engine projects to Forge and check on them",
    add_completion=False,
)

app.add_typer(deployment.app, name="deployment", help="Manage Forge deployments")


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    World Forge CLI
    """
    settings = get_settings()
    setup_logging(
        service_name=settings.service_name,
        log_format=settings.log_format,
        log_level="DEBUG" if debug else settings.log_level,
    )


if __name__ == "__main__":
    app()
