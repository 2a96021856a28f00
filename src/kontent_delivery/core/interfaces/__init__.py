"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Lets the rich text resolver depend on an abstraction of the HTML parser.
"""
