"""Core infrastructure: configuration, errors, logging and events."""
