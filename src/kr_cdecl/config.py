"""
Session Configuration
=====================

Settings for the interactive translation loop. Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the cdecl tool, which wins)

Environment Variables
---------------------
| Variable          | Field      | Example         |
|-------------------|------------|-----------------|
| CDECL_PROMPT      | prompt     | "cdecl> "       |
| CDECL_SHOW_TREE   | show_tree  | 1, true, yes    |
| CDECL_BLANK_LINE  | blank_line | 0, false, no    |
"""

from dataclasses import dataclass
from typing import Optional
import os


TRUTHY = ("1", "true", "yes", "on")
FALSY = ("0", "false", "no", "off")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable; None if unset or unrecognized."""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    return None


@dataclass
class SessionConfig:
    """
    Configuration for one cdecl session.

    Attributes:
        prompt: Text shown before each input line (default: none)
        show_tree: Print the declarator tree after each description
        blank_line: Print an empty line after each result
    """

    prompt: str = ""
    show_tree: bool = False
    blank_line: bool = True

    @classmethod
    def from_env(cls) -> "SessionConfig":
        """
        Create SessionConfig from environment variables.

        Unrecognized boolean values are ignored and leave the default.

        Returns:
            SessionConfig with values from environment variables
        """
        config = cls()

        if (prompt := os.environ.get("CDECL_PROMPT")) is not None:
            config.prompt = prompt

        if (show_tree := _env_flag("CDECL_SHOW_TREE")) is not None:
            config.show_tree = show_tree

        if (blank_line := _env_flag("CDECL_BLANK_LINE")) is not None:
            config.blank_line = blank_line

        return config
