"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Mission names, text-format keys, corner convention
- exceptions: Exception taxonomy
"""
