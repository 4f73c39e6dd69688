"""Textual UI components."""
