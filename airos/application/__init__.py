"""
Application layer - use cases and DTOs.

Use cases coordinate core services and stores; they are the only entry
point for API handlers that change state.
"""
