"""Built-in conversion rules."""
