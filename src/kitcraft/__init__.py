"""Project scaffolding from installable kits."""

__version__ = "0.1.0"
