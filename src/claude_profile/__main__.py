"""Entry point for running claude-profile as a module.

This allows the CLI to be invoked with ``python -m claude_profile``.
"""

from .cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli(prog_name="claude-profile")
