"""Git stash browser: stashes grouped by branch, with reconstructed diffs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("stashtree")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
