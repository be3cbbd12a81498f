"""Entry point for python -m wcfgate execution.

This module allows running the gateway as a module:
    python -m wcfgate serve
    python -m wcfgate config
    python -m wcfgate --help
"""

from wcfgate.cli import run

if __name__ == "__main__":
    run()
