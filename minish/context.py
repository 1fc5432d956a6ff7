#!/usr/bin/env python3
"""
Prompt context for minish.

Each time the prompt is drawn the shell works out where it is:

- the location label, either ``repo/sub/dir`` inside a git work tree or the
  working directory with the home prefix shown as ``~``
- the current branch, read from ``.git/HEAD``

Nothing is cached. The user may ``cd`` between repositories or switch
branches in another terminal, so every prompt reads the filesystem again.
Any error while probing degrades to "no repository" or "no branch"; drawing
the prompt never fails.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)

GIT_DIR = '.git'
HEAD_REF_PREFIX = 'ref: refs/heads/'

YELLOW = '\033[33m'
RESET = '\033[0m'


@dataclass(frozen=True)
class PromptContext:
    """Display values for one prompt."""
    user: str
    host: str
    location: str
    branch: str = ''
    repo_root: Optional[str] = None


class ContextEngine:
    """Computes a fresh PromptContext from the system state."""

    def __init__(self, system, user: str, host: str, home_var: str = 'HOME'):
        self.system = system
        self.user = user
        self.host = host
        self.home_var = home_var

    def compute_prompt_context(self) -> PromptContext:
        """Build the context for the next prompt."""
        cwd = self.system.getcwd()
        root = self.find_repo_root(cwd)

        if root is None:
            return PromptContext(
                user=self.user,
                host=self.host,
                location=self.home_label(cwd),
            )

        return PromptContext(
            user=self.user,
            host=self.host,
            location=self.repo_label(root, cwd),
            branch=self.read_branch(root),
            repo_root=root,
        )

    def find_repo_root(self, cwd: str) -> Optional[str]:
        """Nearest ancestor of ``cwd`` (inclusive) that has a .git directory."""
        path = cwd
        while True:
            try:
                if self.system.is_dir(posixpath.join(path, GIT_DIR)):
                    logger.debug("repository root: %s", path)
                    return path
            except OSError as e:
                logger.debug("cannot probe %s: %s", path, e)
                return None

            parent = posixpath.dirname(path)
            if parent == path:
                return None
            path = parent

    def read_branch(self, root: str) -> str:
        """
        Branch name from ``<root>/.git/HEAD``.

        Only the symbolic form ``ref: refs/heads/<name>`` yields a branch.
        A detached HEAD, any other ref, or an unreadable file gives ''.
        """
        head_path = posixpath.join(root, GIT_DIR, 'HEAD')
        try:
            content = self.system.read_text(head_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("cannot read %s: %s", head_path, e)
            return ''

        content = content.strip()
        if not content.startswith(HEAD_REF_PREFIX):
            return ''
        return content[len(HEAD_REF_PREFIX):]

    def repo_label(self, root: str, cwd: str) -> str:
        if root == '/':
            # A repository at / has no name; show the path itself
            return cwd
        name = posixpath.basename(root)
        relative = posixpath.relpath(cwd, root)
        if relative == '.':
            return name
        return posixpath.join(name, relative)

    def home_label(self, cwd: str) -> str:
        # Prefix replacement on a path boundary, not tilde expansion
        home = (self.system.getenv(self.home_var) or '').rstrip('/')
        if home and (cwd == home or cwd.startswith(home + '/')):
            return '~' + cwd[len(home):]
        return cwd


def render_prompt(ctx: PromptContext, colors: bool = True) -> str:
    """
    Format the prompt line.

    ``user@host: location$ `` or ``user@host: location [branch]$ ``
    """
    identity = f"{ctx.user}@{ctx.host}"
    branch = f"[{ctx.branch}]" if ctx.branch else ''

    if colors:
        identity = f"{YELLOW}{identity}{RESET}"
        if branch:
            branch = f"{YELLOW}{branch}{RESET}"

    if branch:
        return f"{identity}: {ctx.location} {branch}$ "
    return f"{identity}: {ctx.location}$ "
