"""Entrypoints (inbound adapters) for ESCAPER.

Expose the escaping engine to the outside world: currently the ``escaper``
command-line interface. Parse and validate inputs, call `escaper.Escaper`, and
present results.

Dependency rule: may import `escaper.engine` and `escaper.config`; avoid
importing `escaper.adapters` directly.
"""
