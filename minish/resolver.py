#!/usr/bin/env python3
"""
Command lookup on the search path.
"""

import logging
import posixpath
from typing import List, Optional


logger = logging.getLogger(__name__)


class PathResolver:
    """
    Locates external programs.

    The search path is read from the environment on every lookup, so changes
    to ``PATH`` between commands take effect immediately. A candidate only has
    to exist; whether it is actually executable is discovered at spawn time.
    """

    def __init__(self, system, path_var: str = 'PATH'):
        self.system = system
        self.path_var = path_var

    def search_path(self) -> List[str]:
        """Directories of the search path, in order. Empty entries are skipped."""
        value = self.system.getenv(self.path_var)
        if not value:
            return []
        return [entry for entry in value.split(self.system.pathsep) if entry]

    def resolve(self, name: str) -> Optional[str]:
        """
        Find the program called ``name``.

        Names containing a slash are taken as paths relative to the current
        directory and are not looked up on the search path.

        Returns:
            The path of the first existing candidate, or None.
        """
        if not name:
            return None

        if '/' in name:
            candidate = posixpath.join(self.system.getcwd(), name)
            if self.system.exists(candidate):
                return posixpath.normpath(candidate)
            logger.debug("%s: no such file", name)
            return None

        for directory in self.search_path():
            candidate = posixpath.join(directory, name)
            if self.system.exists(candidate):
                logger.debug("resolved %s to %s", name, candidate)
                return candidate

        logger.debug("%s not found on %s", name, self.path_var)
        return None
