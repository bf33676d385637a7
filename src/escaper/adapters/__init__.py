"""Adapters (infrastructure) for ESCAPER.

Provide concrete implementations of the interfaces in `escaper.interfaces`
(e.g., the codec-backed transcoder for legacy source encodings).

Dependency rule: may import `escaper.domain` and `escaper.config`; the domain
must not import this package.
"""
