"""
Language Detection Agent - Works out the invoker language and artifact for a function.
"""

import logging
import os
from pathlib import Path
from typing import Set

from ..errors import AmbiguousArtifact, ArtifactNotFound, LanguageNotDetected
from ..options import InitOptions, Language
from ..utils.osutils import is_directory


class LanguageDetector:
    """Detects the function language from file names alone."""

    EXTENSION_MAP = {
        '.jar': Language.JAVA,
        '.java': Language.JAVA,
        '.py': Language.PYTHON,
        '.js': Language.NODE,
        '.sh': Language.SHELL,
    }

    # Build files that mark a directory as a Java project
    JAVA_PROJECT_FILES = {'pom.xml', 'build.gradle', 'build.gradle.kts'}

    # Where the default artifact is searched for, relative to the function directory
    ARTIFACT_PATTERNS = {
        Language.JAVA: 'target/*.jar',
        Language.PYTHON: '*.py',
        Language.NODE: '*.js',
        Language.SHELL: '*.sh',
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def detect(self, options: InitOptions) -> Language:
        """Detect the language from the artifact, the function file or the function directory."""

        if options.artifact:
            return self._language_for_file(options.artifact)

        if not is_directory(options.function_path):
            return self._language_for_file(options.function_path)

        candidates = self._scan_directory(Path(options.function_path))
        self.logger.debug("Language candidates in %s: %s", options.function_path, candidates)

        if not candidates:
            raise LanguageNotDetected(
                f"could not detect a function language in {options.function_path}"
            )
        if len(candidates) > 1:
            names = ', '.join(sorted(language.value for language in candidates))
            raise LanguageNotDetected(
                f"found more than one function language in {options.function_path} ({names}), "
                "please specify the language"
            )
        return candidates.pop()

    def default_artifact(self, language: Language, options: InitOptions) -> str:
        """Pick the artifact when none was given, as a path relative to the function directory."""

        if not is_directory(options.function_path):
            return os.path.basename(options.function_path)

        root = Path(options.function_path)
        pattern = self.ARTIFACT_PATTERNS[language]
        matches = sorted(p for p in root.glob(pattern) if p.is_file())

        if not matches:
            raise ArtifactNotFound(
                f"no {pattern} artifact found in {options.function_path}, please specify --artifact"
            )
        if len(matches) > 1:
            names = ', '.join(str(p.relative_to(root)) for p in matches)
            raise AmbiguousArtifact(
                f"more than one artifact matches {pattern} ({names}), please specify --artifact"
            )

        artifact = matches[0].relative_to(root).as_posix()
        self.logger.info("Using artifact %s", artifact)
        return artifact

    def _language_for_file(self, path: str) -> Language:
        suffix = Path(path).suffix.lower()
        if suffix in self.EXTENSION_MAP:
            return self.EXTENSION_MAP[suffix]
        raise LanguageNotDetected(f"could not detect a function language for {path}")

    def _scan_directory(self, directory: Path) -> Set[Language]:
        found: Set[Language] = set()

        for entry in directory.iterdir():
            if entry.is_dir():
                continue
            if entry.name in self.JAVA_PROJECT_FILES:
                found.add(Language.JAVA)
            elif entry.suffix.lower() in self.EXTENSION_MAP:
                found.add(self.EXTENSION_MAP[entry.suffix.lower()])

        if any(p.is_file() for p in directory.glob('target/*.jar')):
            found.add(Language.JAVA)

        return found
