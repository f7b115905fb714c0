"""Version information for cached-externals package"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__author__ = "vistart"
__email__ = "i@vistart.me"
__license__ = "MIT"
__copyright__ = "Copyright 2025 vistart"


def get_version():
    """Get the version string"""
    return __version__
