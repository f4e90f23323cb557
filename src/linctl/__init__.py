"""linctl - command-line client for the Linear issue tracker."""

from linctl._version import version as __version__

__all__ = ["__version__"]
