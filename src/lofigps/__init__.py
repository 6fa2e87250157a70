"""lofigps - unified GPS trackpoint store with time-based position lookup."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("lofigps")
except PackageNotFoundError:
    # Fallback for development without installation
    __version__ = "0.0.0-dev"
