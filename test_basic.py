"""
Basic tests for riff init.
Covers option validation, language detection and Dockerfile rendering without touching Docker.
"""

import os

import pytest

from riff_init.agents.dockerfile_generator import (
    DockerfileGenerator,
    DockerfileTokens,
    artifact_base,
    render_dockerfile,
)
from riff_init.agents.language_detector import LanguageDetector
from riff_init.agents.option_validator import OptionValidator
from riff_init.errors import (
    AmbiguousArtifact,
    ArtifactConflict,
    ArtifactNotFound,
    ArtifactOutsideTree,
    InvalidArtifact,
    LanguageNotDetected,
    PathNotFound,
    RenderError,
    UnsupportedLanguage,
    UnsupportedProtocol,
)
from riff_init.options import HandlerAwareInitOptions, InitOptions, Language


@pytest.fixture
def function_dir(tmp_path):
    """A node function directory with one script in a subdirectory."""
    root = tmp_path / "square"
    (root / "src").mkdir(parents=True)
    (root / "square.js").write_text("module.exports = x => x ** 2;\n")
    (root / "src" / "helper.js").write_text("module.exports = {};\n")
    return root


# Option validation

def test_existing_path_without_artifact_or_protocol(function_dir):
    """An existing directory or file passes on its own."""
    validator = OptionValidator()

    validator.validate(InitOptions(function_path=str(function_dir)))
    validator.validate(InitOptions(function_path=str(function_dir / "square.js")))


def test_missing_function_path(tmp_path):
    with pytest.raises(PathNotFound):
        OptionValidator().validate(InitOptions(function_path=str(tmp_path / "nope")))


def test_function_path_is_cleaned(function_dir):
    options = InitOptions(function_path=str(function_dir) + "/./src/../")
    OptionValidator().validate(options)
    assert options.function_path == str(function_dir)


def test_absolute_artifact_is_rejected(function_dir):
    """Absolute artifacts fail whether or not they exist."""
    validator = OptionValidator()

    for artifact in (str(function_dir / "square.js"), "/does/not/exist.js"):
        options = InitOptions(function_path=str(function_dir), artifact=artifact)
        with pytest.raises(InvalidArtifact):
            validator.validate(options)


def test_relative_artifact_is_cleaned(function_dir):
    options = InitOptions(function_path=str(function_dir), artifact="./src/helper.js/")
    OptionValidator().validate(options)
    assert options.artifact == os.path.join("src", "helper.js")


def test_directory_artifact_is_rejected(function_dir):
    options = InitOptions(function_path=str(function_dir), artifact="src")
    with pytest.raises(InvalidArtifact):
        OptionValidator().validate(options)


def test_artifact_outside_function_tree(function_dir):
    (function_dir.parent / "other.js").write_text("")
    options = InitOptions(function_path=str(function_dir), artifact="../other.js")
    with pytest.raises(ArtifactOutsideTree):
        OptionValidator().validate(options)


def test_artifact_outside_tree_of_function_file(function_dir):
    """With a file as function path, the artifact must stay in that file's directory."""
    (function_dir.parent / "x.js").write_text("")
    options = InitOptions(function_path=str(function_dir / "square.js"), artifact="../x.js")
    with pytest.raises(ArtifactOutsideTree):
        OptionValidator().validate(options)


def test_containment_is_a_string_prefix_check(tmp_path):
    """A sibling directory sharing the root's name as a prefix is accepted."""
    root = tmp_path / "b"
    sibling = tmp_path / "bFoo"
    root.mkdir()
    sibling.mkdir()
    (sibling / "x.js").write_text("")

    options = InitOptions(function_path=str(root), artifact="../bFoo/x.js")
    OptionValidator().validate(options)
    assert options.artifact == os.path.join("..", "bFoo", "x.js")


def test_missing_artifact(function_dir):
    options = InitOptions(function_path=str(function_dir), artifact="missing.js")
    with pytest.raises(ArtifactNotFound):
        OptionValidator().validate(options)


def test_file_function_path_and_same_artifact(function_dir):
    options = InitOptions(function_path=str(function_dir / "square.js"), artifact="square.js")
    OptionValidator().validate(options)


def test_file_function_path_conflicts_with_other_artifact(function_dir):
    (function_dir / "cube.js").write_text("")
    options = InitOptions(function_path=str(function_dir / "square.js"), artifact="cube.js")
    with pytest.raises(ArtifactConflict):
        OptionValidator().validate(options)


def test_protocol_is_lower_cased(function_dir):
    options = InitOptions(function_path=str(function_dir), protocol="HTTP")
    OptionValidator().validate(options)
    assert options.protocol == "http"


def test_unsupported_protocol(function_dir):
    options = InitOptions(function_path=str(function_dir), protocol="FTP")
    with pytest.raises(UnsupportedProtocol):
        OptionValidator().validate(options)
    assert options.protocol == "ftp"


def test_custom_protocol_set(function_dir):
    validator = OptionValidator(supported_protocols=["kafka"])
    validator.validate(InitOptions(function_path=str(function_dir), protocol="Kafka"))
    with pytest.raises(UnsupportedProtocol):
        validator.validate(InitOptions(function_path=str(function_dir), protocol="http"))


# Dockerfile generation

def test_java_dockerfile():
    options = HandlerAwareInitOptions(
        artifact="target/app.jar", riff_version="0.1", handler="com.example.Fn"
    )
    dockerfile = DockerfileGenerator().generate("java", options)

    assert dockerfile == (
        "\n"
        "FROM projectriff/java-function-invoker:0.1\n"
        "ARG FUNCTION_JAR=/functions/app.jar\n"
        "ARG FUNCTION_CLASS=com.example.Fn\n"
        "ADD target/app.jar $FUNCTION_JAR\n"
        "ENV FUNCTION_URI file://${FUNCTION_JAR}?handler=${FUNCTION_CLASS}\n"
    )
    assert "FUNCTION_CLASS=com.example.Fn" in dockerfile
    assert "projectriff/java-function-invoker:0.1" in dockerfile


def test_python_dockerfile():
    options = HandlerAwareInitOptions(artifact="words/uppercase.py", riff_version="0.0.3", handler="process")
    dockerfile = DockerfileGenerator().generate(Language.PYTHON, options)

    assert "FROM projectriff/python2-function-invoker:0.0.3\n" in dockerfile
    assert "ARG FUNCTION_MODULE=uppercase.py\n" in dockerfile
    assert "ARG FUNCTION_HANDLER=process\n" in dockerfile
    assert "ADD ./uppercase.py /\nADD ./requirements.txt /\n" in dockerfile
    assert "pip install -r /requirements.txt" in dockerfile
    assert dockerfile.endswith("ENV FUNCTION_URI file:///${FUNCTION_MODULE}?handler=${FUNCTION_HANDLER}\n")


def test_node_dockerfile():
    options = InitOptions(artifact="lib/square.js", riff_version="0.0.3")
    dockerfile = DockerfileGenerator().generate("node", options)

    assert dockerfile == (
        "\n"
        "FROM projectriff/node-function-invoker:0.0.3\n"
        "ENV FUNCTION_URI /functions/lib/square.js\n"
        "ADD square.js ${FUNCTION_URI}\n"
    )


def test_shell_dockerfile():
    options = InitOptions(artifact="echo.sh", riff_version="0.0.3")
    dockerfile = DockerfileGenerator().generate("shell", options)

    assert 'ARG FUNCTION_URI="/echo.sh"\n' in dockerfile
    assert "ADD echo.sh /\n" in dockerfile
    assert "ENV FUNCTION_URI $FUNCTION_URI\n" in dockerfile


def test_artifact_base_ignores_trailing_separator():
    """Unvalidated artifacts still render the last path element."""
    dockerfile = DockerfileGenerator().generate("shell", InitOptions(artifact="a/b.sh/", riff_version="1"))

    assert 'ARG FUNCTION_URI="/b.sh"\n' in dockerfile
    assert artifact_base("a/b.sh/") == "b.sh"
    assert artifact_base("") == "."
    assert artifact_base("/") == "/"


def test_js_is_an_alias_for_node():
    options = HandlerAwareInitOptions(artifact="square.js", riff_version="0.0.3", handler="ignored")
    generator = DockerfileGenerator()

    assert generator.generate("js", options) == generator.generate("node", options)


def test_unsupported_language():
    with pytest.raises(UnsupportedLanguage):
        DockerfileGenerator().generate("ruby", InitOptions(artifact="fn.rb"))


def test_generation_does_not_modify_options():
    options = HandlerAwareInitOptions(artifact="target/app.jar", riff_version="0.1", handler="Fn")
    before = options.model_dump()
    DockerfileGenerator().generate("java", options)
    assert options.model_dump() == before


def test_render_errors():
    """Broken templates and unknown tokens fail instead of rendering partially."""
    tokens = DockerfileTokens(Artifact="fn.sh", ArtifactBase="fn.sh", RiffVersion="0.1")

    with pytest.raises(RenderError):
        render_dockerfile("FROM image:{{ RiffVersion ", tokens)
    with pytest.raises(RenderError):
        render_dockerfile("FROM image:{{ Tag }}", tokens)

    assert render_dockerfile("ADD {{ Artifact }} /\n", tokens) == "ADD fn.sh /\n"


def test_language_parse():
    assert Language.parse("js") is Language.NODE
    assert Language.parse("java") is Language.JAVA
    assert Language.JAVA.requires_handler
    assert Language.PYTHON.requires_handler
    assert not Language.NODE.requires_handler
    with pytest.raises(UnsupportedLanguage):
        Language.parse("JS")


# Language detection

def test_detect_node_directory(function_dir):
    detector = LanguageDetector()
    options = InitOptions(function_path=str(function_dir))

    language = detector.detect(options)

    assert language is Language.NODE
    assert detector.default_artifact(language, options) == "square.js"


def test_detect_from_artifact_and_file(tmp_path):
    detector = LanguageDetector()
    script = tmp_path / "echo.sh"
    script.write_text("echo $1\n")

    assert detector.detect(InitOptions(function_path=str(tmp_path), artifact="echo.sh")) is Language.SHELL
    assert detector.detect(InitOptions(function_path=str(script))) is Language.SHELL
    assert detector.default_artifact(Language.SHELL, InitOptions(function_path=str(script))) == "echo.sh"


def test_detect_java_project(tmp_path):
    (tmp_path / "pom.xml").write_text("<project/>")
    (tmp_path / "target").mkdir()
    (tmp_path / "target" / "greeter-1.0.0.jar").write_bytes(b"PK")
    detector = LanguageDetector()
    options = InitOptions(function_path=str(tmp_path))

    language = detector.detect(options)

    assert language is Language.JAVA
    assert detector.default_artifact(language, options) == "target/greeter-1.0.0.jar"


def test_detect_mixed_directory(tmp_path):
    (tmp_path / "fn.py").write_text("")
    (tmp_path / "fn.js").write_text("")

    with pytest.raises(LanguageNotDetected) as excinfo:
        LanguageDetector().detect(InitOptions(function_path=str(tmp_path)))
    assert "node, python" in str(excinfo.value)


def test_detect_nothing(tmp_path):
    (tmp_path / "README.md").write_text("")

    with pytest.raises(LanguageNotDetected):
        LanguageDetector().detect(InitOptions(function_path=str(tmp_path)))
    with pytest.raises(LanguageNotDetected):
        LanguageDetector().detect(InitOptions(function_path=str(tmp_path / "README.md")))


def test_default_artifact_errors(tmp_path):
    detector = LanguageDetector()
    options = InitOptions(function_path=str(tmp_path))

    with pytest.raises(ArtifactNotFound):
        detector.default_artifact(Language.PYTHON, options)

    (tmp_path / "a.py").write_text("")
    (tmp_path / "b.py").write_text("")
    with pytest.raises(AmbiguousArtifact):
        detector.default_artifact(Language.PYTHON, options)
