#!/usr/bin/env python3
"""
Command dispatch for minish.

Takes the tokens of one command line and decides what runs: a built-in, an
external program found on the search path, or nothing ("not found"). Every
outcome comes back as a CommandResult; only ``exit`` asks the session to stop.
"""

import logging
from typing import List, Optional

from .builtins import Builtin, CommandResult
from .resolver import PathResolver
from .system import HostSystem, SpawnError


logger = logging.getLogger(__name__)

# Status reported when a resolved program cannot be started
SPAWN_FAILURE_STATUS = 126


class CommandDispatcher:
    """
    Routes command lines to built-ins or external programs.

    The system object supplies the working directory, environment and process
    spawning, so the dispatcher runs unchanged against a VirtualSystem.
    """

    def __init__(self, system=None, resolver: Optional[PathResolver] = None,
                 home_var: str = 'HOME'):
        self.system = system or HostSystem()
        self.resolver = resolver or PathResolver(self.system)
        self.home_var = home_var

    def dispatch(self, tokens: List[str]) -> CommandResult:
        """Run one command line. ``tokens`` must not be empty."""
        if not tokens:
            raise ValueError("cannot dispatch an empty command line")

        name, args = tokens[0], tokens[1:]

        builtin = Builtin.lookup(name)
        if builtin is not None:
            logger.debug("builtin %s with %d argument(s)", builtin.value, len(args))
            return builtin.run(self, args)

        path = self.resolver.resolve(name)
        if path is None:
            return CommandResult(text=f"Command {name} not found", exit_code=127)

        return self._execute_external(name, path, args)

    def _execute_external(self, name: str, path: str, args: List[str]) -> CommandResult:
        try:
            status = self.system.spawn(path, args)
        except SpawnError as e:
            logger.debug("spawn of %s failed", path, exc_info=True)
            return CommandResult(
                text=f"{name}: failed to execute: {e}",
                exit_code=SPAWN_FAILURE_STATUS
            )
        return CommandResult(exit_code=status)
