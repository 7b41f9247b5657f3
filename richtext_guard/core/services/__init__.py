"""Functional core services: pure functions, no I/O."""
