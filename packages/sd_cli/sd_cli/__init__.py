"""Command line interface for DNS service discovery."""
