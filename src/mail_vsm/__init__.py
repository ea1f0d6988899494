# Vector space model email classifier

from .version import API_VERSION

__version__ = API_VERSION
