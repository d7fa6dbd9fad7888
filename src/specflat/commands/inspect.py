"""Inspect commands -- examine the flattened views of a Swagger document.

Provides the ``specflat inspect`` sub-command group with read-only
commands for viewing the route table, the reachable schema set, the
flattened models, and the property relations between definitions.  Every
sub-command loads, validates and parses the document named by ``SOURCE``
and presents one view as a table (or JSON with ``--json``).
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specflat.models import LoadedSpec
from specflat.output import error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def source_argument() -> Any:  # noqa: ANN401
    return typer.Argument(help="Path or http(s) URL of a Swagger 2.0 document.")


def path_style_option() -> Any:  # noqa: ANN401
    return typer.Option(None, "--path-style", help="Route string style: raw or express.")


def resource_style_option() -> Any:  # noqa: ANN401
    return typer.Option(
        None, "--resource-style", help="Resource grouping style: path or segment."
    )


def load_document(
    ctx: typer.Context,
    source: str,
    path_style: Optional[str] = None,
    resource_style: Optional[str] = None,
) -> LoadedSpec:
    """Run the full pipeline for *source* using the effective configuration.

    Style options given on the command line win over the configured
    presets.

    Raises:
        typer.Exit: With the error's exit code when the location is not
            a URL or existing path, or when loading, decoding,
            validation or formatter selection fails.
    """
    from specflat.exceptions import SpecflatError, SpecLoadError
    from specflat.models import GlobalConfig
    from specflat.parser import build_formatter, parse_source
    from specflat.parser.loader import validate_source

    config: GlobalConfig = (ctx.obj or {}).get("config") or GlobalConfig()

    try:
        problem = validate_source(source)
        if problem is not True:
            raise SpecLoadError(problem)
        formatter = build_formatter(
            path_style or config.formatters.path_style,
            resource_style or config.formatters.resource_style,
        )
        return parse_source(source, formatter, timeout=config.request.timeout)
    except SpecflatError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _model_list(refs: list) -> str:
    return ", ".join(f"{r.model}[]" if r.array else r.model for r in refs) or "-"


@inspect_app.command("routes")
def inspect_routes(
    ctx: typer.Context,
    source: str = source_argument(),
    path_style: Optional[str] = path_style_option(),
    resource_style: Optional[str] = resource_style_option(),
) -> None:
    """List the route table grouped by resource.

    Array-typed schemas are shown with a ``[]`` suffix.

    Example::

        specflat inspect routes swagger.yaml --path-style express
    """
    loaded = load_document(ctx, source, path_style, resource_style)

    headers = ["Resource", "Method", "Route", "Params", "Responses"]
    rows: list[list[str]] = []
    for resource, entries in loaded.parsed.resources.items():
        for entry in entries:
            rows.append([
                resource,
                entry.method.value.upper(),
                entry.route,
                _model_list(entry.params),
                _model_list(entry.responses),
            ])

    get_output().print_table(headers, rows, title=f"Routes ({len(rows)})")


@inspect_app.command("refs")
def inspect_refs(
    ctx: typer.Context,
    source: str = source_argument(),
) -> None:
    """List every schema reachable from an operation.

    Example::

        specflat inspect refs swagger.json
    """
    loaded = load_document(ctx, source)
    refs = loaded.parsed.refs

    if not refs:
        info("No operation references a schema definition.")
        return

    headers = ["Schema", "Properties", "Composed"]
    rows: list[list[str]] = []
    for name, definition in refs.items():
        if definition is None:
            rows.append([name, "(missing definition)", ""])
            continue
        props = ", ".join((definition.get("properties") or {}).keys()) or "-"
        rows.append([name, props, "Yes" if definition.get("allOf") else ""])

    get_output().print_table(headers, rows, title=f"Reachable schemas ({len(rows)})")


@inspect_app.command("models")
def inspect_models(
    ctx: typer.Context,
    source: str = source_argument(),
) -> None:
    """List the flattened models with their merged required fields.

    Example::

        specflat inspect models swagger.json --json
    """
    loaded = load_document(ctx, source)
    models = loaded.parsed.models

    if not models:
        info("No models found in this document.")
        return

    headers = ["Model", "Required", "Properties"]
    rows = [
        [name, ", ".join(model.required) or "-", ", ".join(model.properties) or "-"]
        for name, model in sorted(models.items())
    ]
    get_output().print_table(headers, rows, title=f"Models ({len(rows)})")


@inspect_app.command("relations")
def inspect_relations(
    ctx: typer.Context,
    source: str = source_argument(),
) -> None:
    """List which definitions use other definitions as property types.

    Example::

        specflat inspect relations swagger.json
    """
    from specflat.parser.collector import related_models

    loaded = load_document(ctx, source)
    relations = related_models(loaded.loaded.get("definitions") or {})

    if not relations:
        info("No definition uses another definition as a property type.")
        return

    headers = ["Model", "Used by", "Plural form"]
    rows: list[list[str]] = []
    for target, used_by in relations.items():
        for relation in used_by:
            rows.append([target, relation.model_name, relation.plural_form or ""])

    get_output().print_table(headers, rows, title=f"Relations ({len(rows)})")
