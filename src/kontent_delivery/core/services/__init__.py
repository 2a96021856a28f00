"""Core services.

Why:
- Mapping of API payloads into domain objects and rich text resolution.
- Services depend on interfaces, not on concrete adapters, except for the
  default HTML parser.
"""
