#!/usr/bin/env python3
"""
Main CLI entry point for riff init.

Generates invoker Dockerfiles for riff functions:
  python3 main.py init node -f square
"""

from riff_init.cli import main


if __name__ == "__main__":
    main()
