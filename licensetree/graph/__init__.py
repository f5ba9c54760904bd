"""Resolved dependency graph model and closure computation."""
