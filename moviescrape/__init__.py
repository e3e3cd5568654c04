"""Movie metadata lookup through site plugins, searchers and a caching store."""

__version__ = "0.1.0"