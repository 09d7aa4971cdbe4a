"""Command-line interface: terminal session handling and the demo application."""
