"""Command line tool: show how a URL resolves into a Request.

Usage:
    frontpath inspect http://localhost/app/index.php/users/5 --base-path /app/index.php
    frontpath inspect /app/ --overrides request.yaml --format json

The overrides file is a YAML mapping with the keys accepted by
parse_overrides(). Command line options win over the file.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from frontpath import __version__
from frontpath._errors import RequestError
from frontpath._request import Request

# Override keys replaced by a command line option, with their aliases
_OPTION_KEYS = {
    "base_path": ("basePath", "base_path"),
    "script_path": ("scriptPath", "script_path"),
    "scheme": ("scheme",),
    "method": ("method",),
}


def describe(request: Request) -> dict[str, Any]:
    """Plain-data view of a request, suitable for YAML or JSON output."""
    return {
        "method": request.method,
        "scheme": request.scheme,
        "host": request.host,
        "port": request.port,
        "url": request.url,
        "path": request.path,
        "base_path": request.base_path,
        "script_path": request.script_path,
        "headers": request.headers,
        "search": request.search_vars,
    }


def _load_overrides(path: Path) -> dict[str, Any]:
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"{path}: invalid YAML: {e}"
        raise click.BadParameter(msg, param_hint="--overrides") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping, got {type(data).__name__}"
        raise click.BadParameter(msg, param_hint="--overrides")
    return data


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        msg = f"expected NAME:VALUE, got {raw!r}"
        raise click.BadParameter(msg, param_hint="--header")
    return name.strip(), value.strip()


@click.group()
@click.version_option(__version__, prog_name="frontpath")
def main() -> None:
    """Inspect request path resolution."""


@main.command()
@click.argument("url")
@click.option("--base-path", default=None, help="Deployment prefix, e.g. /app/index.php")
@click.option("--script-path", default=None, help="Path routed below the base path")
@click.option("--scheme", default=None, help="http or https")
@click.option("--method", default=None, help="Request method")
@click.option("-H", "--header", "headers", multiple=True, help="Header as NAME:VALUE")
@click.option(
    "--overrides",
    "overrides_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with override values",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format",
)
@click.option("-v", "--verbose", is_flag=True, help="Log resolution details to stderr")
def inspect(
    url: str,
    base_path: str | None,
    script_path: str | None,
    scheme: str | None,
    method: str | None,
    headers: tuple[str, ...],
    overrides_file: Path | None,
    output_format: str,
    verbose: bool,
) -> None:
    """Resolve URL and print the resulting request fields."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    overrides = _load_overrides(overrides_file) if overrides_file else {}

    options = {
        "base_path": base_path,
        "script_path": script_path,
        "scheme": scheme,
        "method": method,
    }
    for name, value in options.items():
        if value is None:
            continue
        for key in _OPTION_KEYS[name]:
            overrides.pop(key, None)
        overrides[name] = value

    if headers:
        file_headers = overrides.get("headers") or {}
        if not isinstance(file_headers, dict):
            msg = "'headers' in the overrides file must be a mapping"
            raise click.BadParameter(msg, param_hint="--overrides")
        merged = dict(file_headers)
        merged.update(_parse_header(h) for h in headers)
        overrides["headers"] = merged

    try:
        request = Request(url, overrides)
    except RequestError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)

    data = describe(request)
    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


if __name__ == "__main__":
    main()
