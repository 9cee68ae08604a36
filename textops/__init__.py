"""Command-line front end for the string utilities."""

from textops.cli import main

__all__ = ['main']
