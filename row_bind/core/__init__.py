"""Core layer - configuration, errors, and the row mapper."""
