#!/usr/bin/env python3
"""
Host system access for minish.

Every piece of OS state the shell touches (working directory, environment,
filesystem probes, process spawning) goes through a system object. The shell
itself never calls ``os`` directly, so the same dispatcher and prompt code run
against the real machine or against an in-memory tree.

- HostSystem: the real operating system
- VirtualSystem: an in-memory directory tree with its own cwd and environment
"""

import logging
import os
import posixpath
import subprocess
import sys
from typing import Callable, Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)


class ShellError(Exception):
    """Base class for minish errors."""


class SpawnError(ShellError):
    """A resolved program could not be started."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        reason = getattr(cause, 'strerror', None) or str(cause)
        super().__init__(reason)


class HostSystem:
    """The real operating system."""

    pathsep = os.pathsep

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        """Change the process working directory. Raises OSError on failure."""
        os.chdir(path)

    def getenv(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file. Raises OSError if it cannot be read."""
        with open(path, encoding='utf-8') as f:
            return f.read()

    def spawn(self, path: str, args: List[str]) -> int:
        """
        Run a program and wait for it to finish.

        The child inherits this process's standard streams. Returns the
        child's exit status.

        Raises:
            SpawnError: the program exists but could not be executed
        """
        logger.debug("spawning %s with %d argument(s)", path, len(args))
        sys.stdout.flush()
        try:
            completed = subprocess.run([path, *args], check=False)
        except OSError as e:
            raise SpawnError(path, e) from e
        logger.debug("%s exited with status %d", path, completed.returncode)
        return completed.returncode


class VirtualSystem:
    """
    An in-memory stand-in for the host.

    Directories and files live in plain dictionaries keyed by absolute POSIX
    path. Programs are registered as files with an optional handler that is
    called on spawn; every spawn is recorded in ``spawned``.
    """

    pathsep = ':'

    def __init__(self, cwd: str = '/', env: Optional[Dict[str, str]] = None):
        self.dirs = {'/'}
        self.files: Dict[str, str] = {}
        self.programs: Dict[str, Optional[Callable[[List[str]], int]]] = {}
        self.env: Dict[str, str] = dict(env or {})
        self.spawned: List[Tuple[str, List[str]]] = []
        self.unreadable = set()
        self.cwd = '/'
        self.mkdir(cwd)
        self.cwd = self._normalize(cwd)

    def _normalize(self, path: str) -> str:
        if not path.startswith('/'):
            path = posixpath.join(self.cwd, path)
        return posixpath.normpath(path).replace('//', '/')

    def mkdir(self, path: str) -> 'VirtualSystem':
        """Create a directory and any missing parents."""
        path = self._normalize(path)
        while path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path)
        return self

    def write(self, path: str, content: str) -> 'VirtualSystem':
        path = self._normalize(path)
        self.mkdir(posixpath.dirname(path))
        self.files[path] = content
        return self

    def add_program(self, path: str,
                    handler: Optional[Callable[[List[str]], int]] = None) -> 'VirtualSystem':
        """Install an executable; ``handler(args)`` supplies its exit status."""
        path = self._normalize(path)
        self.write(path, '')
        self.programs[path] = handler
        return self

    def getcwd(self) -> str:
        return self.cwd

    def chdir(self, path: str) -> None:
        target = self._normalize(path)
        if target in self.files:
            raise NotADirectoryError(20, 'Not a directory', path)
        if target not in self.dirs:
            raise FileNotFoundError(2, 'No such file or directory', path)
        self.cwd = target

    def getenv(self, name: str) -> Optional[str]:
        return self.env.get(name)

    def exists(self, path: str) -> bool:
        path = self._normalize(path)
        return path in self.dirs or path in self.files

    def is_dir(self, path: str) -> bool:
        return self._normalize(path) in self.dirs

    def read_text(self, path: str) -> str:
        path = self._normalize(path)
        if path in self.unreadable:
            raise PermissionError(13, 'Permission denied', path)
        if path in self.dirs:
            raise IsADirectoryError(21, 'Is a directory', path)
        if path not in self.files:
            raise FileNotFoundError(2, 'No such file or directory', path)
        return self.files[path]

    def spawn(self, path: str, args: List[str]) -> int:
        path = self._normalize(path)
        if path not in self.programs:
            raise SpawnError(path, PermissionError(13, 'Permission denied', path))
        self.spawned.append((path, list(args)))
        handler = self.programs[path]
        return handler(list(args)) if handler else 0
