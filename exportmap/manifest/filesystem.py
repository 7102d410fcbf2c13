#!/usr/bin/env python3
"""Filesystem access for the manifest layer.

The resolution core never touches the filesystem; manifests and workspaces
read through a FileSystemAdapter so tests can substitute a fake one.
"""

import os
from abc import ABC, abstractmethod
from typing import List


class FileSystemAdapter(ABC):
    """Abstract filesystem operations used by the manifest layer."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if ``path`` exists."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Return True if ``path`` is a directory."""

    @abstractmethod
    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Return the content of the file at ``path``."""

    @abstractmethod
    def list_dir(self, path: str) -> List[str]:
        """Return the entry names of the directory at ``path``."""


class LocalFileSystem(FileSystemAdapter):
    """FileSystemAdapter backed by the local filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        with open(path, "r", encoding=encoding) as f:
            return f.read()

    def list_dir(self, path: str) -> List[str]:
        return sorted(os.listdir(path))


DEFAULT_FILESYSTEM = LocalFileSystem()
