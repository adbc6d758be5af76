"""Document rules."""
