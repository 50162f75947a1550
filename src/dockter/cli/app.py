"""
Dockter command line interface.

Commands:
- compile: Generate .Dockerfile for a project
- build: Generate .Dockerfile and build an image from it
- platforms: List supported runtime platforms
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dockter._version import get_version
from dockter.core.config import LOG_LEVEL_ENV_VAR, DockterConfig, load_config
from dockter.core.context import SoftwareEnvironment, load_environment
from dockter.core.errors import DockterError
from dockter.generators import Ecosystem, Generator, create_generator, get_registry

app = typer.Typer(
    help="Reproducible Docker images for research projects",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

FolderArg = Annotated[
    Path,
    typer.Argument(help="Project folder", exists=True, file_okay=False, dir_okay=True),
]
EnvironOpt = Annotated[
    Path | None,
    typer.Option("--environ", "-e", help="Environment description (JSON)"),
]
PlatformOpt = Annotated[
    str | None,
    typer.Option("--platform", "-p", help="Runtime platform (e.g. Python, R, deb)"),
]
PythonOpt = Annotated[
    int | None,
    typer.Option("--python", help="Python major version (2 or 3)"),
]
NoHeaderOpt = Annotated[
    bool,
    typer.Option("--no-header", help="Omit the generated-by header comment"),
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dockter {get_version()}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = False,
) -> None:
    _configure_logging(verbose)


def _load_environ(
    folder: Path, environ: Path | None, config: DockterConfig
) -> SoftwareEnvironment:
    """Load the environment description, or an empty one when none exists."""
    if environ is not None:
        return load_environment(environ)
    default = folder / config.environ
    if default.exists():
        return load_environment(default)
    return SoftwareEnvironment(name=folder.resolve().name)


def _make_generator(
    folder: Path,
    environ: Path | None,
    platform: str | None,
    python: int | None,
) -> tuple[Generator, DockterConfig]:
    config = load_config(folder)
    environment = _load_environ(folder, environ, config)
    options = {"python": python if python is not None else config.python}
    generator = create_generator(
        environment,
        folder=folder,
        platform=platform or config.platform,
        version=get_version(),
        **options,
    )
    return generator, config


def _fail(error: DockterError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(error.message)}")
    return typer.Exit(code=1)


@app.command(name="compile")
def compile_command(
    folder: FolderArg = Path("."),
    environ: EnvironOpt = None,
    platform: PlatformOpt = None,
    python: PythonOpt = None,
    no_header: NoHeaderOpt = False,
) -> None:
    """
    Generate .Dockerfile for a project and print it.
    """
    try:
        generator, config = _make_generator(folder, environ, platform, python)
        dockerfile = generator.generate(config.header and not no_header)
    except DockterError as e:
        raise _fail(e) from e

    typer.echo(dockerfile, nl=False)


@app.command(name="build")
def build_command(
    folder: FolderArg = Path("."),
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Image name (default: folder name)")
    ] = None,
    environ: EnvironOpt = None,
    platform: PlatformOpt = None,
    python: PythonOpt = None,
    no_header: NoHeaderOpt = False,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Do not use the Docker build cache")
    ] = False,
) -> None:
    """
    Generate .Dockerfile for a project and build a Docker image from it.
    """
    from dockter.build import DockerBuildConfig, DockerBuilder

    try:
        generator, config = _make_generator(folder, environ, platform, python)
        generator.generate(config.header and not no_header)

        image = name or config.image_name(folder)
        platform_tag = generator.ecosystem.runtime_platform
        console.print(f"Building [cyan]{escape(image)}[/cyan] ({escape(platform_tag)})")
        build_config = DockerBuildConfig(folder=folder, image_name=image, no_cache=no_cache)
        builder = DockerBuilder(build_config)
        builder.build(on_line=lambda line: console.print(line, markup=False, highlight=False))
    except DockterError as e:
        raise _fail(e) from e

    console.print(f"[green]Built image {escape(image)}[/green]")


@app.command(name="platforms")
def platforms_command() -> None:
    """
    List supported runtime platforms.
    """
    table = Table(title="Runtime platforms")
    table.add_column("Platform", style="cyan")
    table.add_column("Description")

    table.add_row(Ecosystem.runtime_platform, Ecosystem.description)
    registry = get_registry()
    for platform in registry.list_platforms():
        table.add_row(platform, registry.get(platform).description)

    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the dockter command."""
    app(args=argv)
