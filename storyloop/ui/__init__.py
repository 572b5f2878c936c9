"""Textual user interface for Storyloop."""
