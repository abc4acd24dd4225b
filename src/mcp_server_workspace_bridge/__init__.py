import click
from pathlib import Path
import logging
import os
from datetime import datetime

from .logging_config import configure_logging
from .server import serve

VERBOSITY_LEVELS = {0: "WARNING", 1: "INFO"}


def resolve_log_level(verbose: int) -> str:
    """-v flags win; otherwise LOG_LEVEL, otherwise WARNING"""
    if verbose:
        return VERBOSITY_LEVELS.get(verbose, "DEBUG")
    return os.environ.get("LOG_LEVEL", "WARNING").upper()


@click.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Current project directory (defaults to the working directory)",
)
@click.option("-v", "--verbose", count=True)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Log line format on stderr",
)
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable logging to file in the project's logs/ directory",
)
def main(
    project: Path | None, verbose: int, log_format: str, enable_file_logging: bool
) -> None:
    """MCP Workspace Bridge - cross-project file and git history access for MCP"""
    import asyncio

    project_dir = (project or Path.cwd()).absolute()

    # Load .env file from the project if it exists
    env_file = project_dir / ".env"
    if env_file.exists():
        from dotenv import load_dotenv

        load_dotenv(env_file, override=False)

    log_file = None
    if enable_file_logging:
        session_id = os.environ.get(
            "MCP_SESSION_ID", datetime.now().strftime("%Y%m%d_%H%M%S")
        )
        log_file = project_dir / "logs" / f"workspace_bridge-{session_id}.log"

    configure_logging(
        resolve_log_level(verbose),
        json_format=log_format == "json",
        log_file=log_file,
    )
    if env_file.exists():
        logging.info(f"Loaded environment variables from {env_file}")
    if log_file is not None:
        logging.info(f"📝 File logging enabled: {log_file}")

    asyncio.run(serve(project_dir))


if __name__ == "__main__":
    main()
