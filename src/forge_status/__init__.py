"""World Forge deployment status CLI."""

__version__ = "0.1.0"
