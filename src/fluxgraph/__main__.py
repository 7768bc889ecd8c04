"""Entry point for running fluxgraph as a module.

Usage:
    python -m fluxgraph --source <dir> --output <file>

Example:
    python -m fluxgraph --source clusters/production --output docs/flux.mmd
"""

from fluxgraph.cli import app

if __name__ == "__main__":
    app()
