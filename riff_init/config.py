"""
Defaults shared by the CLI and the workflow.
"""

import os

DEFAULT_RIFF_VERSION = os.getenv("RIFF_VERSION", "0.0.3")

SUPPORTED_PROTOCOLS = ("stdio", "http", "grpc")

DOCKERFILE_NAME = "Dockerfile"
