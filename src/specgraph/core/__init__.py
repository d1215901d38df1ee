"""Core data model and graph store."""
