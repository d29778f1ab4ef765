"""Credential holders for external services."""
