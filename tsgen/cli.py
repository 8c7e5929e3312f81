import asyncio
import logging
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tsgen.codegen.codegen import Codegen
from tsgen.config import DEFAULT_FILENAMES, create_default_config, get_config

console = Console()
app = typer.Typer(
    name='tsgen',
    help='Generate TypeScript API clients from a remote API description',
    no_args_is_help=True,
)


class ConsoleReporter:
    """Reports progress through logging and failures on the console."""

    def info(self, message: str) -> None:
        logging.getLogger('tsgen').info(message)

    def fail(self, error: BaseException) -> NoReturn:
        console.print(f'[red]Error:[/red] {escape(str(error))}')
        raise typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger('tsgen')
    logger.handlers = [RichHandler(console=console, show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option('--dry-run', help='Fetch and list the files without writing them'),
    ] = False,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    """Generate the type file and service folder from configuration.

    If no config file is specified, tsgen.yaml or the [tool.tsgen] table of
    pyproject.toml in the current directory is used.

    Examples:
        tsgen generate
        tsgen generate --config tsgen.yaml
        tsgen generate -c config.json --dry-run
    """
    _configure_logging(verbose)
    reporter = ConsoleReporter()

    try:
        codegen = Codegen(get_config(config), reporter=reporter)
    except Exception as e:
        reporter.fail(e)

    if dry_run:
        try:
            files = asyncio.run(codegen.dry_run())
        except Exception as e:
            reporter.fail(e)
        console.print('[dim]Files that would be generated:[/dim]')
        for file in files:
            console.print(f'  - {file.path}')
        return

    codegen.run()
    console.print('[green]Successfully generated code[/green]')
    written = codegen.written_files
    if written:
        console.print('[dim]Generated files:[/dim]')
        for path in written:
            console.print(f'  - {path}')


@app.command()
def init(
    path: Annotated[
        str, typer.Argument(help='Where to write the configuration file')
    ] = DEFAULT_FILENAMES[0],
) -> None:
    """Create a starter configuration file."""
    try:
        written = create_default_config(path)
    except FileExistsError as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)
    console.print(f'Created {written}')


@app.command()
def version() -> None:
    """Show the version of tsgen."""
    from tsgen import __version__

    console.print(f'tsgen version: {__version__}')


if __name__ == '__main__':
    app()
