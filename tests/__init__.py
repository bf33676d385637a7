"""ESCAPER test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- e2e/          : The ``escaper`` command driven through Click's CliRunner.

General guidance
- Keep unit fast and deterministic (no real I/O); prefer fakes over mocks at boundaries.
- Expected outputs are written out literally; do not derive them from the code under test.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, e2e, property
"""
