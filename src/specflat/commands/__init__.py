"""Built-in CLI sub-commands for specflat.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~specflat.commands.parse` -- print the full flattened result.
* :mod:`~specflat.commands.inspect` -- tables of routes, refs, models and
  relations.
* :mod:`~specflat.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (for ``parse``).
"""
