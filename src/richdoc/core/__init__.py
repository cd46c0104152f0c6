"""Core primitives of the HTML to document conversion."""
