"""Command-line interface for cjsmirror."""
