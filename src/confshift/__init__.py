"""confshift: convert properties, YAML, env lists and Compose files."""

__version__ = "0.3.0"
