"""Domain layer for ESCAPER.

Contains the escaping rules proper: the codepoint converter, per-context rule
tables, value objects, and error types. This package is deliberately
technology-agnostic.

Dependency rule: do not import from `escaper.adapters` or `escaper.entrypoints`.
"""
