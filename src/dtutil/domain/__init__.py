"""Domain layer — value types, patterns, and the date/time operations.

This layer depends only on stdlib and Babel locale data.
It must never import from services, output, commands, or config.
"""
