from .source import ContentSource, Entry, join, walk_files
from .git import GitClient
from .http import Fetcher

__all__ = [
    "ContentSource",
    "Entry",
    "join",
    "walk_files",
    "GitClient",
    "Fetcher",
]
