#!/usr/bin/env python3
"""
Built-in commands for minish.

The set of built-ins is closed: ``Builtin`` enumerates them and each member
carries its own handler. The dispatcher and ``type`` share ``Builtin.lookup``
so a name is recognised as a built-in in exactly one place.

Handlers never print. They return a CommandResult and leave output to the
terminal session.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional


EXIT_CODE_PATTERN = re.compile(r'[+-]?\d+')


@dataclass
class CommandResult:
    """
    Outcome of one dispatched command line.

    ``text`` is printed by the session unless it is None. ``terminate`` asks the
    session to stop and the process to exit with ``exit_code``.
    """
    text: Optional[str] = None
    exit_code: int = 0
    terminate: bool = False

    def __str__(self) -> str:
        return self.text or ''


def builtin_exit(dispatcher, args: List[str]) -> CommandResult:
    """Exit the shell.

    Usage:
        exit [CODE]

    Options:
        CODE                   Signed integer exit status (default: 0)

    Examples:
        exit                   # Exit with status 0
        exit 42                # Exit with status 42
    """
    if not args:
        return CommandResult(exit_code=0, terminate=True)

    if len(args) > 1:
        return CommandResult(
            text=f"Error: exit takes 1 argument but got {len(args)}",
            exit_code=1
        )

    if not EXIT_CODE_PATTERN.fullmatch(args[0]):
        return CommandResult(
            text=f"exit: {args[0]}: numeric argument required",
            exit_code=2
        )

    code = int(args[0])
    return CommandResult(text=f"Exited with code {code}", exit_code=code, terminate=True)


def builtin_echo(dispatcher, args: List[str]) -> CommandResult:
    """Display a line of text.

    Usage:
        echo [STRING...]

    Examples:
        echo hello world       # Print hello world
    """
    return CommandResult(text=' '.join(args))


def builtin_type(dispatcher, args: List[str]) -> CommandResult:
    """Describe how each name would be interpreted.

    Usage:
        type NAME...

    Examples:
        type echo              # echo is a shell builtin
        type ls                # ls is /usr/bin/ls
    """
    lines = []
    exit_code = 0
    for name in args:
        if Builtin.lookup(name) is not None:
            lines.append(f"{name} is a shell builtin")
            continue

        path = dispatcher.resolver.resolve(name)
        if path is not None:
            lines.append(f"{name} is {path}")
        else:
            lines.append(f"type: {name}: not found")
            exit_code = 1

    return CommandResult(text='\n'.join(lines) if lines else None, exit_code=exit_code)


def builtin_pwd(dispatcher, args: List[str]) -> CommandResult:
    """Print the working directory."""
    return CommandResult(text=dispatcher.system.getcwd())


def builtin_cd(dispatcher, args: List[str]) -> CommandResult:
    """Change the working directory.

    Usage:
        cd PATH

    Options:
        PATH                   Directory to change to; a leading ~ is HOME

    Examples:
        cd /usr/bin            # Go to /usr/bin
        cd ..                  # Go to parent directory
        cd ~/projects          # Go to projects in home
    """
    if len(args) != 1:
        return CommandResult(
            text=f"cd: expected 1 argument but got {len(args)}",
            exit_code=1
        )

    original = args[0]
    target = original
    if target.startswith('~'):
        home = dispatcher.system.getenv(dispatcher.home_var)
        if home is None:
            return CommandResult(text="cd: HOME not set", exit_code=1)
        target = home + target[1:]

    try:
        dispatcher.system.chdir(target)
    except OSError:
        return CommandResult(
            text=f"cd: {original}: No such file or directory",
            exit_code=1
        )
    return CommandResult()


class Builtin(Enum):
    """The fixed set of commands implemented inside the shell."""
    EXIT = 'exit'
    ECHO = 'echo'
    TYPE = 'type'
    PWD = 'pwd'
    CD = 'cd'

    @classmethod
    def lookup(cls, name: str) -> Optional['Builtin']:
        """The built-in called ``name``, or None."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def handler(self) -> Callable:
        return _HANDLERS[self]

    def run(self, dispatcher, args: List[str]) -> CommandResult:
        return self.handler(dispatcher, args)


_HANDLERS: Dict[Builtin, Callable] = {
    Builtin.EXIT: builtin_exit,
    Builtin.ECHO: builtin_echo,
    Builtin.TYPE: builtin_type,
    Builtin.PWD: builtin_pwd,
    Builtin.CD: builtin_cd,
}
