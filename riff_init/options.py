"""
Option records passed from the CLI to the validator and generator.
"""

from enum import Enum

from pydantic import BaseModel

from .config import DEFAULT_RIFF_VERSION
from .errors import UnsupportedLanguage


class InitOptions(BaseModel):
    """Options common to every `riff init` invocation."""
    function_path: str = ""
    artifact: str = ""
    protocol: str = ""
    riff_version: str = DEFAULT_RIFF_VERSION


class HandlerAwareInitOptions(InitOptions):
    """Options for invokers that need an explicit entry point."""
    handler: str = ""


class Language(str, Enum):
    """Languages with a function invoker."""
    JAVA = "java"
    PYTHON = "python"
    SHELL = "shell"
    NODE = "node"

    @property
    def requires_handler(self) -> bool:
        return self in (Language.JAVA, Language.PYTHON)

    @classmethod
    def parse(cls, key: str) -> "Language":
        """Map a CLI language key (including the `js` alias) to a Language."""
        if key in LANGUAGE_ALIASES:
            return LANGUAGE_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedLanguage(f"unsupported language {key}") from None


LANGUAGE_ALIASES = {
    "js": Language.NODE,
}

LANGUAGE_KEYS = [language.value for language in Language] + list(LANGUAGE_ALIASES)
