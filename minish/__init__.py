"""
minish - A minimal interactive shell with a git-aware prompt

This package provides a small POSIX-style command interpreter: a quote-aware
tokenizer, a handful of built-in commands, search-path lookup for external
programs, and a prompt that shows the current repository and branch.
"""

__version__ = "0.1.0"

from .system import (
    HostSystem,
    VirtualSystem,
    ShellError,
    SpawnError,
)

from .tokenizer import (
    Tokenizer,
    tokenize,
)

from .resolver import (
    PathResolver,
)

from .context import (
    ContextEngine,
    PromptContext,
    render_prompt,
)

from .builtins import (
    Builtin,
    CommandResult,
)

from .dispatcher import (
    CommandDispatcher,
)

from .terminal import (
    TerminalSession,
    TerminalConfig,
    main,
)

__all__ = [
    # System access
    "HostSystem",
    "VirtualSystem",
    "ShellError",
    "SpawnError",

    # Parsing
    "Tokenizer",
    "tokenize",

    # Lookup and prompt
    "PathResolver",
    "ContextEngine",
    "PromptContext",
    "render_prompt",

    # Dispatch
    "Builtin",
    "CommandResult",
    "CommandDispatcher",

    # Terminal
    "TerminalSession",
    "TerminalConfig",
    "main",

    # Version info
    "__version__",
]
