"""Command implementations for the ulid CLI."""
