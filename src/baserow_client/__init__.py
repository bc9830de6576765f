"""baserow-client - An async client for the Baserow REST API with schema-aware field mapping."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("baserow-client")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["__version__"]
