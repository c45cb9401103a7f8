"""Domain modules, one per API resource family."""
