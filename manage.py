import logging
from pathlib import Path

import click
import uvicorn

from resume_builder.app.api.dependencies import build_print_renderer
from resume_builder.app.api.routes.route_logic.resume_crud import get_resume_content
from resume_builder.app.api.routes.route_logic.user_crud import (
    create_user as create_user_db,
)
from resume_builder.app.api.routes.route_logic.user_crud import get_user_by_username
from resume_builder.app.core.config import get_settings
from resume_builder.app.core.logging_config import configure_logging
from resume_builder.app.database.database import create_tables, session_scope
from resume_builder.app.schemas.user import UserCreate

log = logging.getLogger(__name__)


@click.group()
def cli():
    """Management script for the Resume Builder application."""
    configure_logging(get_settings())


@cli.command("init-db")
def init_db():
    """
    Create any missing database tables.

    Notes:
        1. Creates tables for every registered model.
        2. On failure, prints an error message and exits with status 1.

    """
    _msg = "init_db starting"
    log.debug(_msg)
    click.echo("Creating database tables...")
    try:
        create_tables()
    except Exception as e:
        _error_msg = f"An error occurred while creating tables: {e}"
        log.exception(_error_msg)
        raise click.ClickException(_error_msg)
    click.echo("Database tables are up to date.")
    _msg = "init_db returning"
    log.debug(_msg)


@cli.command("create-user")
@click.option("--username", required=True, help="Username for the new user.")
@click.option("--email", required=True, help="Email address for the new user.")
@click.option("--full-name", default=None, help="Display name shown on the resume.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new user.",
)
def create_user(username: str, email: str, full_name: str | None, password: str):
    """
    Create a user account.

    Args:
        username (str): The username for the new user.
        email (str): The email address for the new user.
        full_name (str | None): The display name.
        password (str): The password for the new user.

    Notes:
        1. Establishes a database connection.
        2. Creates the user; duplicates and invalid input are reported as errors.

    """
    _msg = "create_user starting"
    log.debug(_msg)
    click.echo(f"Creating user '{username}'...")

    try:
        with session_scope() as db:
            user = create_user_db(
                db,
                UserCreate(
                    username=username,
                    email=email,
                    password=password,
                    full_name=full_name,
                ),
            )
    except ValueError as e:
        _error_msg = f"Error creating user: {e}"
        log.error(_error_msg)
        raise click.ClickException(_error_msg)

    _success_msg = f"User '{user.username}' created successfully."
    click.echo(_success_msg)
    log.info(_success_msg)


@cli.command("export-resume")
@click.option("--username", required=True, help="Owner of the resume.")
@click.option(
    "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write the printable HTML page to.",
)
@click.option(
    "--auto-print/--no-auto-print",
    default=True,
    help="Whether the page opens the print dialog when loaded.",
)
def export_resume(username: str, output: Path, auto_print: bool):
    """
    Write a user's saved resume as a printable HTML page.

    Args:
        username (str): The owner of the resume.
        output (Path): Destination file.
        auto_print (bool): Whether the page prints itself.

    """
    _msg = "export_resume starting"
    log.debug(_msg)

    with session_scope() as db:
        user = get_user_by_username(db, username)
        if user is None:
            raise click.ClickException(f"Unknown user: {username}")
        content = get_resume_content(db, user_id=user.id)

    if not content.strip():
        raise click.ClickException("Resume content not found")

    renderer = build_print_renderer(get_settings())
    renderer.auto_print = auto_print
    document = renderer.render(content)
    output.write_text(document.html, encoding="utf-8")
    click.echo(f"Wrote printable resume to {output}")


@cli.command("runserver")
@click.option("--host", default="127.0.0.1", help="Interface to bind.")
@click.option("--port", default=8000, type=int, help="Port to bind.")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def runserver(host: str, port: int, reload: bool):
    """Serve the API with uvicorn."""
    uvicorn.run(
        "resume_builder.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=get_settings().log_level.lower(),
    )


def main():
    """Run the command line interface."""
    cli()


if __name__ == "__main__":
    main()
