"""Command line interface for the Cocoro client."""
