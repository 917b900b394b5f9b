"""Adapters for external systems (storage, generation workflow)."""
