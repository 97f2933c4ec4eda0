"""Command-line interface for the WMS backend."""
