"""Command-line entry points for schema-upgrades."""
