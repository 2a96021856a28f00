"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2 and plain classes).
- The domain knows nothing about HTTP or the CLI: only content concepts.
"""
