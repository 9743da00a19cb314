"""Command-language engine for the devterm project terminal."""

__version__ = "0.1.0"
