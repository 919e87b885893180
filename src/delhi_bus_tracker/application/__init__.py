"""Application layer - use cases over the domain models."""
