"""Command-line interface for ringwar."""
