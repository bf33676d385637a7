"""Interfaces (application boundary) for ESCAPER.

Defines framework-free contracts: ABCs for the collaborators the escaping core
depends on (currently the legacy-encoding transcoder). Escaping rules stay out
of this package.

Dependency rule: this package is independent: do not import from any
`escaper.*` modules. It may be imported by `escaper.domain`,
`escaper.adapters`, and `escaper.engine`.
"""
