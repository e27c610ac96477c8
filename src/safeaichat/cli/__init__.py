"""Command-line interface for safeaichat."""
