"""Command line interface for bump-please."""
