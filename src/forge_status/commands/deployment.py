import json

from rich.console import Console
from rich.markup import escape
import structlog
import typer

from forge_status.client import get_forge_client
from forge_status.config import GlobalConfig, Settings, get_settings, load_global_config
from forge_status.exceptions import ForgeError
from forge_status.logging_config import get_logger
from forge_status.models import Organization, ProjectInfo
from forge_status.pipeline import collect_status, run_status

app = typer.Typer()
console = Console()
logger = get_logger(__name__)

STATUS_HINT = "  $ 'world-forge deployment status'"


def _fail(error: ForgeError) -> typer.Exit:
    logger.error("command_failed", error=str(error), error_type=type(error).__name__)
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
    return typer.Exit(code=1)


def _load_selection(settings: Settings) -> GlobalConfig | None:
    """Return the global config if both organization and project are selected."""
    global_config = load_global_config(settings.config_dir)
    if not global_config.organization_id:
        console.print("[yellow]No organization selected.[/yellow]")
        console.print("Select one with: [cyan]world organization switch[/cyan]")
        return None
    if not global_config.project_id:
        console.print("[yellow]No project selected.[/yellow]")
        console.print("Select one with: [cyan]world project switch[/cyan]")
        return None
    structlog.contextvars.bind_contextvars(project_id=global_config.project_id)
    return global_config


def _details_header(title: str, org: Organization, project: ProjectInfo) -> str:
    return "\n".join(
        [
            title,
            "-" * 17,
            f"Organization: {org.name}",
            f"Org Slug:     {org.slug}",
            f"Project:      {project.name}",
            f"Project Slug: {project.slug}",
            f"Repository:   {project.repo_url}",
            "",
        ]
    )


@app.command()
def status(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show deployment status and instance health of the selected project."""
    settings = get_settings()
    try:
        selection = _load_selection(settings)
        if selection is None:
            return

        with get_forge_client(settings, selection.credential.token) as client:
            if json_output:
                snapshot = collect_status(client.fetch, selection.project_id)
                typer.echo(json.dumps(snapshot.to_dict(), indent=2))
                return

            project = client.get_project(selection.organization_id, selection.project_id)
            report = run_status(client.fetch, project)

        typer.echo(report, nl=False)

    except ForgeError as e:
        raise _fail(e) from e


@app.command()
def deploy():
    """Deploy the selected project."""
    settings = get_settings()
    try:
        selection = _load_selection(settings)
        if selection is None:
            return

        with get_forge_client(settings, selection.credential.token) as client:
            org = client.get_organization(selection.organization_id)
            project = client.get_project(selection.organization_id, selection.project_id)
            typer.echo(_details_header("Deployment Details", org, project))
            client.deploy(selection.organization_id, selection.project_id)

        logger.info("deploy_requested", organization_id=selection.organization_id)
        console.print("\n[bold green]✨ Your deployment is being processed! ✨[/bold green]")
        console.print("\nTo check the status of your deployment, run:")
        console.print(f"[yellow]{STATUS_HINT}[/yellow]")

    except ForgeError as e:
        raise _fail(e) from e


@app.command()
def destroy(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Destroy the deployment of the selected project."""
    settings = get_settings()
    try:
        selection = _load_selection(settings)
        if selection is None:
            return

        with get_forge_client(settings, selection.credential.token) as client:
            org = client.get_organization(selection.organization_id)
            project = client.get_project(selection.organization_id, selection.project_id)
            typer.echo(_details_header("Project Details", org, project))

            if not yes and not typer.confirm(
                "Are you sure you want to destroy this project?", default=False
            ):
                typer.echo("Destroy cancelled")
                return

            client.destroy(selection.organization_id, selection.project_id)

        logger.info("destroy_requested", organization_id=selection.organization_id)
        console.print("\n[bold]🗑️  Your destroy request is being processed![/bold]")
        console.print("\nTo check the status of your destroy request, run:")
        console.print(f"[yellow]{STATUS_HINT}[/yellow]")

    except ForgeError as e:
        raise _fail(e) from e
