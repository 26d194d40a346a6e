"""
formvault: scoped form persistence and decimal statistics.
"""

from .core.config import VERSION as __version__
