"""
Brightwire - contact intake and admin back-office
"""
from brightwire.version import __version__

__all__ = ["__version__"]
