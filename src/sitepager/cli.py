"""Command line interface for sitepager."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from sitepager.collection import (
    CollectionError,
    CollectionLoader,
    CollectionWriter,
    DirectoryScanner,
    load_site_metadata,
)
from sitepager.config import ConfigError, ConfigManager
from sitepager.pagination import PaginationResult, paginate

console = Console()
error_console = Console(stderr=True)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Conditionally print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return

    important_modes = {"summary", "warning", "error"}
    if summary_only and mode not in important_modes:
        return

    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands.

    Args:
        command: Command name to include in the summary.
        root: Target root path relevant to the command.
        metrics: Ordered mapping of metric names to values.

    Returns:
        str: Rich-formatted summary string.
    """

    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _configure_logging(level: str, verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _result_payload(result: PaginationResult, source: Path, output: Path | None) -> dict[str, Any]:
    return {
        "source": source.as_posix(),
        "output": output.as_posix() if output is not None else None,
        "total_pages": result.total_pages,
        "moved": result.moved,
        "created": result.created,
        "updated": result.updated,
        "notes": result.notes,
    }


def _result_table(result: PaginationResult, files: dict[str, dict[str, Any]]) -> Table:
    table = Table(title="Pagination plan", show_lines=False)
    table.add_column("Page", justify="right")
    table.add_column("Source")
    table.add_column("Destination")
    for source, destination in result.moved.items():
        page = files.get(destination, {}).get("pageNumber", "")
        table.add_row(str(page), source, destination)
    for index_path in result.created:
        page = files[index_path]["pagination"]["num"]
        table.add_row(str(page), "[dim](generated)[/dim]", index_path)
    if result.updated:
        table.add_row("1", "[dim](existing)[/dim]", result.updated)
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="sitepager")
def cli() -> None:
    """sitepager paginates a directory of site content into index pages.

    Returns:
        None: This function is invoked for its side effects.
    """


@cli.command("paginate")
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=str),
    help="Directory to write the paginated collection to.",
)
@click.option(
    "--data",
    "data_dir",
    type=click.Path(exists=True, file_okay=False, path_type=str),
    help="Directory of JSON/YAML files merged into index pages as global metadata.",
)
@click.option("--directory", type=str, help="Directory of SOURCE to paginate.")
@click.option("--per-page", type=int, help="Entries per page.")
@click.option("--sort-by", type=str, help="Dotted metadata field to sort by.")
@click.option("--reverse/--no-reverse", default=None, help="Sort newest-first.")
@click.option(
    "--output-dir",
    "output_pattern",
    type=str,
    help="Page pattern using :directory and :num.",
)
@click.option("--index-layout", type=str, help="Layout assigned to generated index pages.")
@click.option("--first-index-file", type=str, help="Existing file used as the first page.")
@click.option(
    "--permalinks/--flat", "use_permalinks", default=None, help="URL scheme for page links."
)
@click.option("--dry-run", is_flag=True, help="Preview changes without writing files.")
@click.option(
    "--json", "json_output", is_flag=True, help="Emit JSON describing the pagination result."
)
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def paginate_command(
    ctx: click.Context,
    source: str,
    output: str | None,
    data_dir: str | None,
    directory: str | None,
    per_page: int | None,
    sort_by: str | None,
    reverse: bool | None,
    output_pattern: str | None,
    index_layout: str | None,
    first_index_file: str | None,
    use_permalinks: bool | None,
    dry_run: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Paginate the content found under SOURCE.

    Args:
        ctx: Click context used for parameter source inspection.
        source: Root directory of the site content.
        output: Destination directory for the paginated collection.
        data_dir: Directory holding global metadata documents.
        directory: Override for the paginated directory.
        per_page: Override for the page size.
        sort_by: Override for the sort field.
        reverse: Override for the sort direction.
        output_pattern: Override for the page path pattern.
        index_layout: Override for the index layout.
        first_index_file: Override for the first index file.
        use_permalinks: Override for the URL scheme.
        dry_run: If True, skip writing the output directory.
        json_output: If True, emit JSON describing the result.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
        verbose: When True, log debug output to stderr.

    Raises:
        click.ClickException: If configuration, loading or pagination fails.
    """

    option_overrides = {
        "directory": directory,
        "per_page": per_page,
        "sort_by": sort_by,
        "reverse": reverse,
        "output_dir": output_pattern,
        "index_layout": index_layout,
        "first_index_file": first_index_file,
        "use_permalinks": use_permalinks,
    }
    overrides = {key: value for key, value in option_overrides.items() if value is not None}

    try:
        config = ConfigManager().load(overrides=overrides)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    _configure_logging(config.logging.level, verbose)

    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE
    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    summary_only = summary_mode if explicit_summary else config.cli.summary_default

    if json_output:
        if explicit_quiet and quiet_enabled:
            raise click.ClickException("--json cannot be combined with --quiet.")
        if explicit_summary and summary_only:
            raise click.ClickException("--json cannot be combined with --summary.")
        quiet_enabled = False
        summary_only = False

    source_root = Path(source).expanduser().resolve()
    output_root = Path(output).expanduser().resolve() if output else None

    try:
        files = CollectionLoader(DirectoryScanner(recursive=True)).load(source_root)
        metadata = load_site_metadata(Path(data_dir)) if data_dir else {}
    except CollectionError as exc:
        _handle_cli_error(str(exc), code="collection_error", json_output=json_output, original=exc)
        return

    result = paginate(files, metadata, config.pagination)
    if not result.ok:
        _handle_cli_error(
            f"Pagination failed: {result.error}",
            code="pagination_error",
            json_output=json_output,
            original=result.error,
        )
        return

    if output_root is not None and not dry_run:
        try:
            CollectionWriter().write(files, output_root)
        except (CollectionError, OSError) as exc:
            _handle_cli_error(str(exc), code="write_error", json_output=json_output, original=exc)
            return

    if json_output:
        payload = _result_payload(result, source_root, output_root)
        payload["dry_run"] = dry_run
        console.print_json(data=payload)
        return

    if result.moved:
        _emit_message(
            _result_table(result, files),
            mode="detail",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )
    for note in result.notes:
        _emit_message(
            f"[yellow]{note}[/yellow]",
            mode="warning",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )
    if dry_run and output_root is not None:
        _emit_message(
            "[yellow]Dry run: no files were written.[/yellow]",
            mode="warning",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )

    _emit_message(
        _format_summary_line(
            "Paginate",
            source_root,
            {
                "pages": result.total_pages,
                "moved": len(result.moved),
                "created": len(result.created),
                "first_page": "updated" if result.updated else "skipped",
            },
        ),
        mode="summary",
        quiet=quiet_enabled,
        summary_only=summary_only,
    )


@cli.group()
def config() -> None:
    """Inspect and change the settings stored in ~/.sitepager/config.yaml."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore SITEPAGER_* environment variables.")
def config_view(no_env: bool) -> None:
    """Show the settings a paginate run would start from.

    Args:
        no_env: If True, ignore environment variables.

    Raises:
        click.ClickException: If the configuration file is invalid.
    """
    manager = ConfigManager()
    try:
        settings = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"[dim]# {escape(manager.config_path.as_posix())}[/dim]")
    yaml_text = yaml.safe_dump(settings.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store VALUE under KEY.

    KEY is `section.field` or a bare pagination option, so `perPage`,
    `per_page` and `pagination.per_page` are equivalent. VALUE is read as a
    YAML literal.

    Raises:
        click.ClickException: If the key is unknown or the value is invalid.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        previous, current = manager.set_value(key, value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if previous == current:
        console.print(f"[yellow]{escape(key)} is already {escape(repr(current))}.[/yellow]")
        return
    change = f"{escape(repr(previous))} -> {escape(repr(current))}"
    console.print(f"[green]Updated {escape(key)}: {change}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an editor and validate the result.

    Raises:
        click.ClickException: If the edited file does not hold valid settings.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")
    if edited is None or edited == original:
        console.print("[yellow]No changes applied.[/yellow]")
        return

    try:
        manager.replace_text(edited)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Entry point for the ``sitepager`` console script."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
