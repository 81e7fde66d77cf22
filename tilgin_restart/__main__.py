"""
Main entry point for the tilgin_restart package.

Allows running the tool as: python -m tilgin_restart
"""

from tilgin_restart.cli import run

if __name__ == "__main__":
    run()
