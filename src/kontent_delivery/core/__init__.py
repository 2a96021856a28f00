"""Core layer: configuration, domain, interfaces and services (no HTTP, no CLI)."""
