"""Command-execution and confirmation engine."""
