"""Command line interface for DBConnector."""
