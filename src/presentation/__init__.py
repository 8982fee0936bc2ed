"""Presentation layer - FastAPI integration seam (no routes)."""
