"""Domain layer: format enums, value models, parsers and generators.

This layer depends only on stdlib and pydantic.
It must never import from services, config, commands, or output.
"""
