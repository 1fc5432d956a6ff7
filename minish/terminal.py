#!/usr/bin/env python3
"""
Terminal session for minish.

This module provides the read-tokenize-dispatch loop. Each iteration draws
a fresh prompt, reads one line, splits it into tokens and hands them to the
dispatcher. The loop ends on ``exit`` or at end of input.

Design Principles:
- The session owns no state between lines beyond the system's working directory
- Parsing, dispatch and prompt computation live in their own modules
- Output is printed here and nowhere else, external programs excepted
"""

import getpass
import logging
import socket
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from .builtins import CommandResult
from .context import ContextEngine, render_prompt
from .dispatcher import CommandDispatcher
from .resolver import PathResolver
from .system import HostSystem
from .tokenizer import Tokenizer


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


@dataclass
class TerminalConfig:
    """Configuration for terminal session."""
    user: str = field(default_factory=lambda: getpass.getuser())
    hostname: str = field(default_factory=lambda: socket.gethostname().split('.')[0])
    enable_colors: bool = True
    strip_quotes: bool = False
    path_var: str = 'PATH'
    home_var: str = 'HOME'


class TerminalSession:
    """
    Main terminal session manager.

    This class provides the REPL loop: prompt display, line reading, and
    hand-off to the dispatcher.
    """

    def __init__(self, config: Optional[TerminalConfig] = None, system=None):
        """Initialize terminal session."""
        self.config = config or TerminalConfig()
        self.system = system or HostSystem()
        self.tokenizer = Tokenizer(strip_quotes=self.config.strip_quotes)
        self.resolver = PathResolver(self.system, path_var=self.config.path_var)
        self.dispatcher = CommandDispatcher(
            self.system, self.resolver, home_var=self.config.home_var
        )
        self.context = ContextEngine(
            self.system,
            user=self.config.user,
            host=self.config.hostname,
            home_var=self.config.home_var,
        )
        self.running = False

    def get_prompt(self) -> str:
        """Generate the command prompt."""
        ctx = self.context.compute_prompt_context()
        return render_prompt(ctx, colors=self.config.enable_colors)

    def execute_command(self, command_line: str) -> CommandResult:
        """
        Tokenize and dispatch one command line.

        Blank lines produce an empty result without dispatching.
        """
        tokens = self.tokenizer.tokenize(command_line.strip())
        if not tokens:
            return CommandResult()
        return self.dispatcher.dispatch(tokens)

    def run_interactive(self) -> int:
        """
        Run the interactive REPL loop.

        Returns the status the process should exit with.
        """
        self.running = True
        exit_code = 0

        while self.running:
            try:
                command_line = input(self.get_prompt())
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break

            try:
                result = self.execute_command(command_line)
            except KeyboardInterrupt:
                # Interrupted child program; the shell keeps running
                print("^C")
                continue

            if result.text is not None:
                print(result.text)

            if result.terminate:
                exit_code = result.exit_code
                self.running = False

        self.running = False
        return exit_code

    def run_command(self, command_line: str) -> CommandResult:
        """
        Run a single command and return its result.

        This method is useful for non-interactive use.
        """
        return self.execute_command(command_line)


def configure_logging(debug: bool = False) -> None:
    """Send minish log records to stderr; quiet unless ``debug``."""
    root = logging.getLogger('minish')
    if debug and not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for minish."""
    import argparse

    parser = argparse.ArgumentParser(prog='minish', description='Minimal interactive shell')
    parser.add_argument('-c', '--command', help='Execute command and exit')
    parser.add_argument('-u', '--user', help='Set displayed username')
    parser.add_argument('--host', help='Set displayed hostname')
    parser.add_argument('--strip-quotes', action='store_true',
                        help='Remove double quotes from arguments')
    parser.add_argument('--no-color', action='store_true', help='Plain prompt without colors')
    parser.add_argument('--debug', action='store_true', help='Log debug output to stderr')
    args = parser.parse_args(argv)

    configure_logging(debug=args.debug)

    overrides = {}
    if args.user:
        overrides['user'] = args.user
    if args.host:
        overrides['hostname'] = args.host

    config = TerminalConfig(
        enable_colors=not args.no_color,
        strip_quotes=args.strip_quotes,
        **overrides
    )

    session = TerminalSession(config=config)

    if args.command is not None:
        result = session.run_command(args.command)
        if result.text is not None:
            print(result.text)
        return result.exit_code

    return session.run_interactive()


if __name__ == '__main__':
    sys.exit(main())
