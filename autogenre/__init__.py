"""AutoGenre -- tag, deduplicate and organize a local music library."""

from autogenre.utils.constants import APP_VERSION

__version__ = APP_VERSION
