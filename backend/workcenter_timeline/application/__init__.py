"""Application layer: the timeline board and its DTOs."""
