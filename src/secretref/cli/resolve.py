from pathlib import Path

import click

from secretref.cli.utils import configure_logging, output_error, output_result
from secretref.engine import ResolverEngine
from secretref.errors import SecretError


@click.command(name="resolve")
@click.argument("text")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Resolver configuration file",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def resolve_reference(
    text: str, config_path: Path | None, json_output: bool, debug: bool
) -> None:
    """Resolve a secret reference and show where its value comes from.

    The secret value itself is never printed.

    \b
    Examples:
        secretref resolve secret:acme/db-pass
        secretref resolve secret:acme/db-pass --config secretref.yaml --json-output
    """
    configure_logging(debug=debug)

    try:
        with ResolverEngine.from_config_file(config_path) as engine:
            result = engine.resolve_text(text)
    except (SecretError, FileNotFoundError) as e:
        output_error(e, json_output, debug)
        return

    if json_output:
        output_result(
            {"key": result.key, "source": result.source.value, "identity": result.identity},
            json_output=True,
        )
    else:
        output_result(str(result))
