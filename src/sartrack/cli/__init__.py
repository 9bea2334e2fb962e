"""Command line interface for sartrack."""
