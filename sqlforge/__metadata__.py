"""Metadata for the Project."""

from importlib.metadata import PackageNotFoundError, metadata, version

__all__ = ("__project__", "__version__")

try:
    __version__ = version("sqlforge")
    __project__ = metadata("sqlforge")["Name"]
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.1"
    __project__ = "sqlforge"
finally:
    del version, PackageNotFoundError, metadata
