"""Boundary layer: persistence and generative provider adapters."""
