"""Command line interface for the gist sync."""

import sys
import json
import logging
from typing import Optional

import click

from .config import get_optional_env, load_config, load_environment, setup_logging
from ..engine.sync import SyncEngine
from ..exceptions import ConfigurationError
from ..models.sync import SyncState


@click.group()
@click.option('--log-level', default='INFO', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set the logging level')
@click.option('--env-file', type=click.Path(exists=True), help='Path to .env file')
@click.option('--config', 'config_path', type=click.Path(), help='Path to config JSON (default: config.json)')
@click.pass_context
def cli(ctx: click.Context, log_level: str, env_file: Optional[str], config_path: Optional[str]) -> None:
    """GitHub gists to Pipedrive activities sync tool."""
    setup_logging(log_level)
    load_environment(env_file)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx: click.Context):
    """Load config and build the engine, exiting on configuration errors."""
    try:
        config = load_config(ctx.obj.get('config_path'))
        return config, SyncEngine.from_config(config)
    except ConfigurationError as e:
        click.echo(f"Configuration Error: {e}. Exiting...", err=True)
        sys.exit(1)


@cli.command()
@click.option('--since', default=None, help='Checkpoint to start from (default: never)')
@click.option('--output', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.pass_context
def sync(ctx: click.Context, since: Optional[str], output: str) -> None:
    """Run one sync cycle."""
    config, engine = _load(ctx)
    state = SyncState(last_run=since) if since else SyncState()
    
    try:
        execution = engine.run_cycle(config.users, state, triggered_by="cli")
    except Exception as e:
        logging.exception("Unexpected error occurred")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)
    
    if output == 'json':
        click.echo(execution.model_dump_json(indent=2))
        return
    
    summary = execution.get_summary()
    for key, value in summary.items():
        click.echo(f"{key:<24} {value}")
    if execution.outcomes:
        click.echo("")
        _display_outcomes_table(execution.outcomes)


def _display_outcomes_table(outcomes) -> None:
    """Display created activities in a table format."""
    click.echo(f"{'Activity ID':<15} {'Subject':<40} {'Success':<8}")
    click.echo("-" * 65)
    for outcome in outcomes:
        click.echo(f"{str(outcome.id):<15} {str(outcome.subject):<40} {str(outcome.success):<8}")


@cli.command()
@click.argument('name')
@click.option('--since', default=None, help="Treat this as the user's last visit")
@click.pass_context
def lookup(ctx: click.Context, name: str, since: Optional[str]) -> None:
    """Show a tracked user's gists since the last visit."""
    config, engine = _load(ctx)
    
    if since:
        user = config.get_user(name)
        if user is not None:
            user.last_visit = since
    
    result = engine.lookup_entity(config.users, name)
    if result is None:
        click.echo(f"User does not exist: {name}", err=True)
        sys.exit(1)
    
    if not result.success:
        click.echo(f"Could not fetch gists for {name}; last visit unchanged", err=True)
        sys.exit(1)
    
    click.echo(f"Last visited: {result.previous_visit}")
    if not result.gists:
        click.echo("No gists to display!")
        return
    click.echo(json.dumps([gist.model_dump(mode="json") for gist in result.gists], indent=2))


@cli.command()
@click.pass_context
def users(ctx: click.Context) -> None:
    """List tracked users."""
    config, _ = _load(ctx)
    if not config.users:
        click.echo("No users are currently tracked. Add them to the config file")
        return
    for user in config.users:
        click.echo(f"{user.name:<30} {user.last_visit or 'First Visit'}")


@cli.command()
@click.pass_context
def test_connection(ctx: click.Context) -> None:
    """Test connection to the GitHub and Pipedrive APIs."""
    _, engine = _load(ctx)
    
    results = {
        'GitHub': engine.source.test_connection(),
        'Pipedrive': engine.publisher.test_connection(),
    }
    for service, ok in results.items():
        if ok:
            click.echo(f"✓ {service} connection successful")
        else:
            click.echo(f"✗ {service} connection failed", err=True)
    
    if not all(results.values()):
        sys.exit(1)


@cli.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', type=int, default=None, help='Port to listen on (default: $PORT or 3001)')
@click.pass_context
def serve(ctx: click.Context, host: str, port: Optional[int]) -> None:
    """Run the web app with the recurring sync."""
    import uvicorn
    from ..api import app as app_module
    
    config, engine = _load(ctx)
    app_module.configure(config, engine)
    
    port = port or int(get_optional_env('PORT', '3001'))
    uvicorn.run(app_module.app, host=host, port=port)


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
