"""Command-line interface for dendroplot."""
