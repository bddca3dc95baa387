"""fanlog — level- and tag-filtered log routing.

Write a message once; every attached destination whose level and tag
filters accept it receives a copy.
"""

from fanlog._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
