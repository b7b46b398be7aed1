"""
Dockerfile Generation Agent - Renders the invoker Dockerfile for a function.
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Union

from jinja2 import Environment, StrictUndefined, TemplateError

from ..errors import RenderError
from ..options import HandlerAwareInitOptions, InitOptions, Language

PYTHON_FUNCTION_DOCKERFILE_TEMPLATE = """
FROM projectriff/python2-function-invoker:{{ RiffVersion }}
ARG FUNCTION_MODULE={{ ArtifactBase }}
ARG FUNCTION_HANDLER={{ Handler }}
ADD ./{{ ArtifactBase }} /
ADD ./requirements.txt /
RUN  pip install --upgrade pip && pip install -r /requirements.txt
ENV FUNCTION_URI file:///${FUNCTION_MODULE}?handler=${FUNCTION_HANDLER}
"""

NODE_FUNCTION_DOCKERFILE_TEMPLATE = """
FROM projectriff/node-function-invoker:{{ RiffVersion }}
ENV FUNCTION_URI /functions/{{ Artifact }}
ADD {{ ArtifactBase }} ${FUNCTION_URI}
"""

JAVA_FUNCTION_DOCKERFILE_TEMPLATE = """
FROM projectriff/java-function-invoker:{{ RiffVersion }}
ARG FUNCTION_JAR=/functions/{{ ArtifactBase }}
ARG FUNCTION_CLASS={{ Handler }}
ADD target/{{ ArtifactBase }} $FUNCTION_JAR
ENV FUNCTION_URI file://${FUNCTION_JAR}?handler=${FUNCTION_CLASS}
"""

SHELL_FUNCTION_DOCKERFILE_TEMPLATE = """
FROM projectriff/shell-function-invoker:{{ RiffVersion }}
ARG FUNCTION_URI="/{{ ArtifactBase }}"
ADD {{ Artifact }} /
ENV FUNCTION_URI $FUNCTION_URI
"""

DOCKERFILE_TEMPLATES = {
    Language.JAVA: JAVA_FUNCTION_DOCKERFILE_TEMPLATE,
    Language.PYTHON: PYTHON_FUNCTION_DOCKERFILE_TEMPLATE,
    Language.SHELL: SHELL_FUNCTION_DOCKERFILE_TEMPLATE,
    Language.NODE: NODE_FUNCTION_DOCKERFILE_TEMPLATE,
}

# Templates are plain substitution; undefined tokens are errors rather than blanks.
_environment = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


@dataclass(frozen=True)
class DockerfileTokens:
    """Values substituted into a Dockerfile template."""
    Artifact: str = ""
    ArtifactBase: str = ""
    RiffVersion: str = ""
    Handler: str = ""


def artifact_base(artifact: str) -> str:
    """Last element of the artifact path, ignoring trailing separators; "." when empty."""
    if not artifact:
        return "."
    cleaned = os.path.normpath(artifact)
    return os.path.basename(cleaned) or cleaned


def render_dockerfile(template: str, tokens: DockerfileTokens) -> str:
    """Render `template` against `tokens`, raising RenderError on any template problem."""
    try:
        return _environment.from_string(template).render(**asdict(tokens))
    except TemplateError as e:
        raise RenderError(f"failed to render Dockerfile: {e}") from e


class DockerfileGenerator:
    """Selects the invoker template for a language and renders it."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def generate(
        self,
        language: Union[Language, str],
        options: Union[HandlerAwareInitOptions, InitOptions]
    ) -> str:
        """Generate the Dockerfile text for `language`. `options` is not modified."""

        if not isinstance(language, Language):
            language = Language.parse(language)

        tokens = self._build_tokens(language, options)
        self.logger.debug("Rendering %s Dockerfile with %s", language.value, tokens)

        return render_dockerfile(DOCKERFILE_TEMPLATES[language], tokens)

    def _build_tokens(self, language: Language, options: InitOptions) -> DockerfileTokens:
        handler = ""
        if language.requires_handler:
            handler = getattr(options, "handler", "")

        return DockerfileTokens(
            Artifact=options.artifact,
            ArtifactBase=artifact_base(options.artifact),
            RiffVersion=options.riff_version,
            Handler=handler
        )
