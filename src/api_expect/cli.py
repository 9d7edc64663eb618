"""CLI entry point for api-expect."""

import logging
from pathlib import Path

import click
import yaml

from api_expect.config import Config, load_config
from api_expect.errors import ApiExpectError
from api_expect.registry.collections import DEFAULT_CONTEXT, Registry
from api_expect.registry.loader import load_from_config


def _load(source: Path | None, config_path: Path | None, verbose: bool) -> Registry:
    """Resolve config, set up logging and load a fresh registry."""
    try:
        config: Config = load_config(config_path, source_file=source)
        logging.basicConfig(
            level=logging.DEBUG if verbose else config.log_level_value,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return load_from_config(config, registry=Registry())
    except ApiExpectError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def main():
    """API Expect: derive request fixtures and expectations from an API description."""
    pass


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Config file (YAML).")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def inspect(source: Path | None, config_path: Path | None, verbose: bool):
    """Show the groups and contexts loaded from a description."""
    registry = _load(source, config_path, verbose)

    click.echo("Groups:")
    for key, members in registry.groups.items():
        click.echo(f"  {key}: {len(members)}")

    click.echo("Contexts:")
    for name, fixtures in registry.contexts.items():
        click.echo(f"  {name}: {len(fixtures)} fixtures")


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--context", "context_name", default=DEFAULT_CONTEXT, help="Context (trait) to dump.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the fixtures YAML.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Config file (YAML).")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def fixtures(source: Path | None, context_name: str, output: Path | None, config_path: Path | None, verbose: bool):
    """Dump the request fixtures of one context as YAML."""
    registry = _load(source, config_path, verbose)

    data = [f.model_dump() for f in registry.context(context_name)]
    text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"{len(data)} fixtures saved to {output}")
