"""Command-line interface for schemaport (generation only, nothing is executed)."""
