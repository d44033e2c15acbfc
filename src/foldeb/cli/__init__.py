"""Command line interface for foldeb."""
