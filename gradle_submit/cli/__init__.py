"""Command-line interface for gradle-submit."""
