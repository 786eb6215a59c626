"""
CLI module for the adaptive highlighting engine.

Provides command-line tools for annotating text and managing learned state.
"""

from adaptive_highlighter.cli.annotate import main as annotate_main

__all__ = ["annotate_main"]
