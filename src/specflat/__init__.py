"""specflat -- Flatten Swagger 2.0 documents into route tables and merged models.

This package reads a validated Swagger/OpenAPI 2.0 description and derives
the three views that code generators and routing-setup tools need:

* a per-resource **route table** (one entry per path + HTTP verb),
* the **transitive closure** of every schema definition reachable from the
  operations, and
* a **flattened model set** where ``allOf`` composition has been merged into
  a single ``required`` list and ``properties`` map.

Typical usage::

    from specflat.parser import parse_source

    loaded = parse_source("petstore.yaml")
    for resource, routes in loaded.parsed.resources.items():
        print(resource, [r.route for r in routes])

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for parse results and configuration.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
