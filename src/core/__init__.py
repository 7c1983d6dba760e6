"""Core infrastructure: configuration, persistence and external clients."""
