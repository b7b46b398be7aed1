"""
Option Validator - Cleans and checks init options before any Dockerfile is generated.
"""

import logging
import os
from typing import Iterable

from ..config import SUPPORTED_PROTOCOLS
from ..errors import (
    ArtifactConflict,
    ArtifactNotFound,
    ArtifactOutsideTree,
    InvalidArtifact,
    PathNotFound,
    UnsupportedProtocol,
)
from ..options import InitOptions
from ..utils.osutils import file_exists, is_directory


class OptionValidator:
    """Basic sanity check that given paths exist and a valid protocol is given.

    Artifact must be a regular file, relative to the function path.
    If the function path is a regular file and an artifact is also given,
    they must reference the same path.
    """

    def __init__(self, supported_protocols: Iterable[str] = SUPPORTED_PROTOCOLS):
        self.supported_protocols = tuple(supported_protocols)
        self.logger = logging.getLogger(__name__)

    def validate(self, options: InitOptions) -> None:
        """Validate `options`, cleaning paths and lower-casing the protocol in place."""

        options.function_path = os.path.normpath(options.function_path)
        if options.artifact:
            options.artifact = os.path.normpath(options.artifact)

        if options.function_path and not file_exists(options.function_path):
            raise PathNotFound(f"filepath {options.function_path} does not exist")

        if options.artifact:
            self._validate_artifact(options.function_path, options.artifact)

        if options.protocol:
            options.protocol = options.protocol.lower()
            if options.protocol not in self.supported_protocols:
                raise UnsupportedProtocol(f"protocol {options.protocol} is unsupported")

        self.logger.debug(
            "Validated options: function_path=%s artifact=%s protocol=%s",
            options.function_path, options.artifact, options.protocol
        )

    def _validate_artifact(self, function_path: str, artifact: str) -> None:
        if os.path.isabs(artifact):
            raise InvalidArtifact(f"artifact {artifact} must be relative to function path")

        abs_file_path = os.path.abspath(function_path)
        function_is_dir = is_directory(abs_file_path)

        if function_is_dir:
            abs_artifact_path = os.path.join(abs_file_path, artifact)
            abs_file_path_dir = abs_file_path
        else:
            abs_artifact_path = os.path.join(os.path.dirname(abs_file_path), artifact)
            abs_file_path_dir = os.path.dirname(abs_file_path)
        abs_artifact_path = os.path.normpath(abs_artifact_path)

        if is_directory(abs_artifact_path):
            raise InvalidArtifact(f"artifact {abs_artifact_path} must be a regular file")

        # Plain string prefix: a sibling such as /a/bFoo passes for root /a/b.
        if not os.path.dirname(abs_artifact_path).startswith(abs_file_path_dir):
            raise ArtifactOutsideTree(
                f"artifact {abs_artifact_path} cannot be external to filepath {abs_file_path}"
            )

        if not file_exists(abs_artifact_path):
            raise ArtifactNotFound(f"artifact {abs_artifact_path} does not exist")

        if not function_is_dir and abs_file_path != abs_artifact_path:
            raise ArtifactConflict(
                f"artifact {abs_artifact_path} conflicts with filepath {abs_file_path}"
            )
