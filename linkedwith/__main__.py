"""
Entry point for running LinkedWith as a module.

Usage:
    python -m linkedwith [command] [options]

Example:
    python -m linkedwith graph replay events.jsonl
    python -m linkedwith graph neighborhood events.jsonl 1 --at 2000-04-01T00:00:00Z
"""

from linkedwith_cli.main import cli

if __name__ == "__main__":
    cli()
