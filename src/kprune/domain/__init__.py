"""Domain layer: inventory model, prune engine and task adapter."""
