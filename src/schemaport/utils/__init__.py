"""Shared utilities for schemaport."""
