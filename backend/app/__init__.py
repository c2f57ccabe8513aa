"""Road Trip geo API backend."""
