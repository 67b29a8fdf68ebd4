"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Transport names and defaults
- exceptions: Custom exception hierarchy
"""
