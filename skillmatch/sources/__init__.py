from pathlib import Path
from typing import Callable

from .base import PoolSource
from .appwrite import AppwritePoolSource
from .file import FilePoolSource
from .mock import MockPoolSource

from skillmatch.log import get_logger

log = get_logger(__name__)

__all__ = [
    "PoolSource", "AppwritePoolSource", "FilePoolSource", "MockPoolSource",
    "get_pool_source",
]


def get_pool_source(path: Path | None, env_getter: Callable[[str], str]) -> PoolSource:
    if path is not None:
        log.info("Using pool file: %s", path)
        return FilePoolSource(path)

    if env_getter("APPWRITE_PROJECT_ID") and env_getter("APPWRITE_API_KEY"):
        log.info("Using pool source: Appwrite")
        return AppwritePoolSource(env_getter)

    log.info("No pool file or Appwrite credentials — using MockPoolSource")
    return MockPoolSource()
