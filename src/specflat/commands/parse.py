"""Parse command -- print the full flattened result of a Swagger document."""

from __future__ import annotations

from typing import Optional

import typer

from specflat.commands.inspect import (
    load_document,
    path_style_option,
    resource_style_option,
    source_argument,
)
from specflat.output import debug, format_response


def parse_command(
    ctx: typer.Context,
    source: str = source_argument(),
    path_style: Optional[str] = path_style_option(),
    resource_style: Optional[str] = resource_style_option(),
    include_document: bool = typer.Option(
        False, "--include-document", help="Also output the decoded document."
    ),
) -> None:
    """Load, validate and flatten a Swagger 2.0 document.

    Prints ``basepath``, ``resources``, ``refs`` and ``models`` as one
    structured object.  With ``--include-document`` the output is
    ``{loaded, parsed, type}`` instead.

    Example::

        specflat parse swagger.yaml --json > flat.json
        specflat parse https://example.com/swagger.json --path-style express
    """
    loaded = load_document(ctx, source, path_style, resource_style)
    debug(
        f"Parsed {source} ({loaded.type}): {len(loaded.parsed.resources)} resources, "
        f"{len(loaded.parsed.models)} models"
    )

    if include_document:
        format_response(loaded.model_dump(mode="json"))
    else:
        format_response(loaded.parsed.model_dump(mode="json"))
