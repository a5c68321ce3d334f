"""Concrete collaborators for the prune engine."""
