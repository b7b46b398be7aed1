"""
Errors raised while validating options and generating Dockerfiles.
"""


class FunctionInitError(Exception):
    """Base class for every error that aborts `riff init`."""


# Option validation

class PathNotFound(FunctionInitError):
    pass


class InvalidArtifact(FunctionInitError):
    pass


class ArtifactOutsideTree(FunctionInitError):
    pass


class ArtifactNotFound(FunctionInitError):
    pass


class ArtifactConflict(FunctionInitError):
    pass


class UnsupportedProtocol(FunctionInitError):
    pass


# Generation

class UnsupportedLanguage(FunctionInitError):
    pass


class RenderError(FunctionInitError):
    pass


# Detection and output

class LanguageNotDetected(FunctionInitError):
    pass


class AmbiguousArtifact(FunctionInitError):
    pass


class MissingHandler(FunctionInitError):
    pass


class DockerfileExists(FunctionInitError):
    pass
