"""I/O layer: store access and repositories."""
