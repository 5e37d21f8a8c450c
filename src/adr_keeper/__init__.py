"""
adr-keeper: Architecture Decision Record manager

Creates, updates and indexes numbered ADR files in a directory.
"""

try:
    from importlib.metadata import version
    __version__ = version("adr-keeper")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
