"""Adapters: concrete implementations that talk to the outside world (HTTP, HTML parsing)."""
