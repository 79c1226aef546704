"""
Location of the static assets referenced by rendered documents.
"""

import os
import posixpath
from typing import Protocol


MEDIA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'media')

PAGE_SCRIPT = 'index.js'


class AssetResolver(Protocol):
    """Maps a media file name to a URI usable from the document."""

    def resolve(self, relative_path: str) -> str:
        ...


class StaticAssetResolver:
    """
    Resolves media files under a base URL.

    Example:
        StaticAssetResolver('/static').resolve('index.js') -> '/static/media/index.js'
    """

    def __init__(self, base_url: str = ''):
        self.base_url = base_url.rstrip('/')

    def resolve(self, relative_path: str) -> str:
        path = posixpath.join('media', relative_path.lstrip('/'))
        return f"{self.base_url}/{path}"


class FileAssetResolver:
    """Resolves media files to file:// URIs inside the installed package."""

    def __init__(self, media_dir: str = MEDIA_DIR):
        self.media_dir = media_dir

    def resolve(self, relative_path: str) -> str:
        abs_path = os.path.abspath(os.path.join(self.media_dir, relative_path))
        return 'file://' + abs_path.replace(os.sep, '/')
