"""Core components: configuration, grid engine, storage and services."""
