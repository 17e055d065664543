"""Application layer: use-case orchestration services."""
