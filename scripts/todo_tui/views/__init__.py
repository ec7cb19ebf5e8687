"""Rendering: the pure text projector and the Textual screen that shows it."""
