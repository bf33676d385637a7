"""Command-line interface for ESCAPER."""
