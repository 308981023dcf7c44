"""gitsql CLI."""
