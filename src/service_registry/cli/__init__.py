"""Command-line interface for service-registry."""
