"""Traversal, filtering and visual policy over raw graph snapshots."""
