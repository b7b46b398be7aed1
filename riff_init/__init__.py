"""
riff init
Generates invoker Dockerfiles for riff functions written in Java, Python, Node and shell.
"""

__version__ = "0.1.0"
__description__ = "Dockerfile scaffolding for riff function invokers"
