"""Application layer: use cases and request outcomes."""
