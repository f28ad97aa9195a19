import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import get_mirror_config_path
from ..domain.errors import PkgcacheError
from ..domain.models import PackageVersion, VersionlessPackageSpec
from ..registry.dirs import PackageDirs
from ..registry.fetcher import Fetcher
from ..registry.mirrors import MirrorRegistry
from ..registry.transport import HttpPackageSource
from ..resolution.resolver import VersionResolver
from ..services.prepare import PrepareService
from ..ui.progress import ProgressManager

app = typer.Typer(help="Download and cache packages by namespace, name and version.")
console = Console(stderr=True)


class Context:
    """shared objects built once per invocation."""

    def __init__(self, package_path: Optional[Path], package_cache_path: Optional[Path]):
        self.progress_manager = ProgressManager(console)
        self.dirs = PackageDirs.from_platform(package_path, package_cache_path)
        self.mirrors = MirrorRegistry.load(get_mirror_config_path(), self.progress_manager)
        self.fetcher = Fetcher(
            HttpPackageSource(self.progress_manager),
            self.mirrors,
            self.progress_manager,
        )

    def prepare_service(self) -> PrepareService:
        return PrepareService(self.dirs, self.mirrors, self.fetcher)

    def version_resolver(self) -> VersionResolver:
        return VersionResolver(self.fetcher, self.dirs)


@app.callback()
def main_callback(
    ctx: typer.Context,
    package_path: Optional[Path] = typer.Option(
        None, "--package-path", help="Directory of locally installed packages."
    ),
    package_cache_path: Optional[Path] = typer.Option(
        None, "--package-cache-path", help="Directory downloaded packages are cached in."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.obj = Context(package_path, package_cache_path)


def _parse_version(version: str) -> PackageVersion:
    try:
        return PackageVersion.parse(version)
    except ValueError as e:
        console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)


@app.command()
def prepare(
    ctx: typer.Context,
    namespace: str,
    name: str,
    version: Optional[str] = typer.Argument(None, help="Exact version; latest if omitted."),
):
    """make a package available locally and print its directory."""
    state: Context = ctx.obj
    package = VersionlessPackageSpec(namespace=namespace, name=name)
    try:
        if version is None:
            resolved = state.version_resolver().determine_latest_version(package)
        else:
            resolved = _parse_version(version)
        spec = package.at(resolved)
        path = state.prepare_service().prepare_package(spec)
    except PkgcacheError as e:
        console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    typer.echo(str(path))


@app.command()
def latest(ctx: typer.Context, namespace: str, name: str):
    """print the latest available version of a package."""
    state: Context = ctx.obj
    try:
        version = state.version_resolver().determine_latest_version(
            VersionlessPackageSpec(namespace=namespace, name=name)
        )
    except PkgcacheError as e:
        console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    typer.echo(str(version))


@app.command()
def mirrors(ctx: typer.Context):
    """list the configured mirrors."""
    state: Context = ctx.obj
    table = Table(title="Package mirrors")
    table.add_column("Namespace", style="cyan")
    table.add_column("URL template")
    for namespace, entry in state.mirrors.items():
        table.add_row(f"@{namespace}", entry.path)
    Console().print(table)


if __name__ == "__main__":
    app()
