"""Command line interface for Menuflow."""
