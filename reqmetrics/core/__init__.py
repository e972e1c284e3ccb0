"""Core accumulator and timing types."""
