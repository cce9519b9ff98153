from pathlib import Path
from typing import Any

import click
import yaml

from secretref.cli.utils import configure_logging, output_error, output_result
from secretref.engine import ResolverEngine
from secretref.errors import SecretError, SecretFormatError
from secretref.references import find_references


def _check_references(engine: ResolverEngine, config: Any) -> list[dict[str, Any]]:
    results = []
    for path, text in find_references(config):
        entry: dict[str, Any] = {"path": ".".join(str(p) for p in path)}
        try:
            resolved = engine.resolve_text(text)
        except SecretFormatError as e:
            # The malformed text may be a real secret, only report the rule broken
            entry.update(status="error", error=e.reason)
        except SecretError as e:
            entry.update(reference=text, status="error", error=str(e))
        else:
            entry.update(
                reference=resolved.key,
                status="ok",
                source=resolved.source.value,
                identity=resolved.identity,
            )
        results.append(entry)
    return results


def _format_entry(entry: dict[str, Any]) -> str:
    if entry["status"] == "ok":
        mark = click.style("✓", fg="green")
        return f"{mark} {entry['path']}: {entry['reference']} {entry['source']} {entry['identity']}"
    mark = click.style("✗", fg="red")
    return f"{mark} {entry['path']}: {entry['error']}"


@click.command(name="check")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Resolver configuration file",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def check(file: Path, config_path: Path | None, json_output: bool, debug: bool) -> None:
    """Resolve every secret reference in a YAML configuration file.

    Lists each reference with where its value comes from, and fails if any
    reference cannot be resolved. Secret values are never printed.

    \b
    Examples:
        secretref check app.yaml
        secretref check app.yaml --config secretref.yaml --json-output
    """
    configure_logging(debug=debug)

    try:
        with open(file) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        output_error(ValueError(f"Invalid YAML in {file}: {e}"), json_output, debug)
        return

    try:
        with ResolverEngine.from_config_file(config_path) as engine:
            results = _check_references(engine, config)
    except (SecretError, FileNotFoundError) as e:
        output_error(e, json_output, debug)
        return

    failed = [entry for entry in results if entry["status"] != "ok"]

    if json_output:
        output_result(results, json_output=True)
    elif not results:
        click.echo(click.style("No secret references found", fg="blue"))
    else:
        output_result([_format_entry(entry) for entry in results])
        if failed:
            click.echo(click.style(f"\n{len(failed)} of {len(results)} references failed", fg="red"))
        else:
            click.echo(click.style(f"\nAll {len(results)} references resolved", fg="green"))

    if failed:
        raise click.exceptions.Exit(1)
