"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from schema_pruner.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from schema_pruner.output_wrapping import (
    DEFAULT_LINT,
    DEFAULT_WRAPPER,
    WrapOptions,
    WrapperNotFoundError,
    wrap_output,
)
from schema_pruner.reachability import SchemaReferenceError, filter_messages
from schema_pruner.run_execution import (
    PruneRequest,
    RunExecutionError,
    execute_prune_run,
    load_run_artifacts,
)
from schema_pruner.schema_tree import EXPORT_FORMATS
from schema_pruner.tree_inspection import render_summary, render_tree

logger = logging.getLogger(__name__)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-pruner")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """Prune protocol schemas down to the types reachable from an entry set."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML filter configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML filter configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="filter")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON filter configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path for the pruned schema document (overrides output.path)",
)
@click.option(
    "--format",
    "output_format",
    required=False,
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    help="Pruned schema document format (overrides output.format)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the pruned document to stdout instead of writing the output file.",
)
def filter_schema(
    config_path: str, output_path: str | None, output_format: str | None, dry_run: bool
) -> None:
    """Keep only the types reachable from the configured entry sets."""
    try:
        outcome = execute_prune_run(
            PruneRequest(
                config_path=config_path,
                output_path=output_path,
                output_format=output_format,
                write_output=not dry_run,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    summary = render_summary(outcome.reachable)
    if summary:
        click.echo(summary, err=True)
    if outcome.output_path is None:
        click.echo(outcome.document, nl=False)
    else:
        click.echo(str(outcome.output_path))


@cli.command(name="inspect")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON filter configuration file",
)
@click.option(
    "--filtered/--full",
    default=False,
    show_default=True,
    help="Render the pruned tree instead of the full tree.",
)
def inspect_schema(config_path: str, filtered: bool) -> None:
    """Print the schema tree as indented text."""
    try:
        artifacts = load_run_artifacts(config_path)
        if filtered:
            filter_messages(artifacts.tree, artifacts.configuration.filter.requests)
    except (RunExecutionError, SchemaReferenceError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(render_tree(artifacts.tree))


@cli.command(name="wrap")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the generated code to wrap",
)
@click.option(
    "--wrapper",
    default=DEFAULT_WRAPPER,
    show_default=True,
    help="Built-in wrapper name (default, commonjs, es6) or path to a custom wrapper",
)
@click.option(
    "--dependency",
    default=None,
    help="Runtime module name substituted for $DEPENDENCY",
)
@click.option(
    "--lint",
    default=DEFAULT_LINT,
    help="Lint directives prepended as a comment; pass an empty string to omit",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path for the wrapped code; printed to stdout when omitted",
)
def wrap(
    input_path: str, wrapper: str, dependency: str | None, lint: str, output_path: str | None
) -> None:
    """Splice generated code into a wrapper template."""
    try:
        generated = Path(input_path).read_text(encoding="utf-8")
        wrapped = wrap_output(
            generated, WrapOptions(wrapper=wrapper, dependency=dependency, lint=lint)
        )
        if output_path:
            destination = Path(output_path)
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(wrapped, encoding="utf-8")
    except (WrapperNotFoundError, OSError) as exc:
        raise CliError(str(exc)) from exc
    if output_path:
        click.echo(str(Path(output_path).resolve()))
    else:
        click.echo(wrapped, nl=False)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="schema-pruner", standalone_mode=False)
    except CliError as exc:
        logger.debug("Command failed", exc_info=exc)
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
