"""
LangGraph workflow for `riff init`: validate, detect, generate and write.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import logging

from langgraph.graph import StateGraph, END
from pydantic import BaseModel

from .agents.option_validator import OptionValidator
from .agents.language_detector import LanguageDetector
from .agents.dockerfile_generator import DockerfileGenerator
from .agents.dockerfile_writer import DockerfileWriter
from .errors import FunctionInitError, MissingHandler
from .options import HandlerAwareInitOptions, Language

# Define the workflow state
class InitState(BaseModel):
    options: HandlerAwareInitOptions
    requested_language: Optional[str] = None
    dry_run: bool = False
    force: bool = False

    # Detection results
    language: Optional[Language] = None

    # Generated content
    dockerfile_content: Optional[str] = None
    dockerfile_path: Optional[str] = None

    # Workflow control
    current_step: str = "validate"
    completed: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    messages: List[str] = []

@dataclass
class InitResult:
    success: bool
    language: Optional[str] = None
    dockerfile_path: Optional[str] = None
    dockerfile_content: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    messages: List[str] = field(default_factory=list)

class InitWorkflow:
    """Workflow orchestrator using LangGraph."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

        # Initialize agents
        self.option_validator = OptionValidator()
        self.language_detector = LanguageDetector()
        self.dockerfile_generator = DockerfileGenerator()
        self.dockerfile_writer = DockerfileWriter()

        # Build the workflow graph
        self.graph = self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow."""

        workflow = StateGraph(InitState)

        # Add nodes
        workflow.add_node("validate", self._validate_options)
        workflow.add_node("detect", self._detect_language)
        workflow.add_node("generate", self._generate_dockerfile)
        workflow.add_node("write", self._write_dockerfile)
        workflow.add_node("complete", self._complete_workflow)

        workflow.set_entry_point("validate")

        # Every step either moves on or jumps to complete on error
        workflow.add_conditional_edges("validate", self._next_step, {"detect": "detect", "complete": "complete"})
        workflow.add_conditional_edges("detect", self._next_step, {"generate": "generate", "complete": "complete"})
        workflow.add_conditional_edges("generate", self._next_step, {"write": "write", "complete": "complete"})
        workflow.add_edge("write", "complete")
        workflow.add_edge("complete", END)

        return workflow.compile(debug=self.verbose)

    def _validate_options(self, state: InitState) -> Dict[str, Any]:
        """Clean and check the options in place."""
        options = state.options
        try:
            self.option_validator.validate(options)
        except FunctionInitError as e:
            return self._failed(state, e, "Option validation")

        return {
            "options": options,
            "current_step": "detect",
            "messages": state.messages + [f"Options validated for {options.function_path}"],
        }

    def _detect_language(self, state: InitState) -> Dict[str, Any]:
        """Resolve the language, the default artifact and the handler requirement."""
        options = state.options
        try:
            if state.requested_language:
                language = Language.parse(state.requested_language)
            else:
                language = self.language_detector.detect(options)
                if self.verbose:
                    print(f"🔍 Detected {language.value} function")

            if not options.artifact:
                options.artifact = self.language_detector.default_artifact(language, options)

            if language.requires_handler and not options.handler:
                raise MissingHandler(f"a handler is required for {language.value} functions, use --handler")
        except FunctionInitError as e:
            return self._failed(state, e, "Language detection")

        return {
            "options": options,
            "language": language,
            "current_step": "generate",
            "messages": state.messages + [f"Language: {language.value}, artifact: {options.artifact}"],
        }

    def _generate_dockerfile(self, state: InitState) -> Dict[str, Any]:
        """Render the Dockerfile for the detected language."""
        try:
            dockerfile_content = self.dockerfile_generator.generate(state.language, state.options)
        except FunctionInitError as e:
            return self._failed(state, e, "Dockerfile generation")

        return {
            "dockerfile_content": dockerfile_content,
            "current_step": "write",
            "messages": state.messages + [f"{state.language.value} Dockerfile generated"],
        }

    def _write_dockerfile(self, state: InitState) -> Dict[str, Any]:
        """Save the Dockerfile, or print it on a dry run."""
        try:
            dockerfile_path = self.dockerfile_writer.write(
                state.options,
                state.dockerfile_content,
                dry_run=state.dry_run,
                force=state.force
            )
        except FunctionInitError as e:
            return self._failed(state, e, "Writing Dockerfile")

        message = f"Dockerfile written to {dockerfile_path}" if dockerfile_path else "Dry run, nothing written"
        return {
            "dockerfile_path": str(dockerfile_path) if dockerfile_path else None,
            "current_step": "complete",
            "messages": state.messages + [message],
        }

    def _complete_workflow(self, state: InitState) -> Dict[str, Any]:
        """Complete the workflow."""
        if state.error:
            message = f"Workflow completed with errors: {state.error}"
        else:
            message = "Workflow completed successfully"

        return {
            "completed": True,
            "current_step": "completed",
            "messages": state.messages + [message],
        }

    def _failed(self, state: InitState, error: FunctionInitError, step: str) -> Dict[str, Any]:
        self.logger.debug("%s failed: %s", step, error)
        return {
            "error": str(error),
            "error_code": type(error).__name__,
            "current_step": "complete",
            "messages": state.messages + [f"{step} failed: {error}"],
        }

    def _next_step(self, state: InitState) -> str:
        """Route to the step the last node asked for."""
        return state.current_step

    def run(
        self,
        options: HandlerAwareInitOptions,
        language: Optional[str] = None,
        dry_run: bool = False,
        force: bool = False
    ) -> InitResult:
        """Run the complete workflow synchronously."""

        initial_state = InitState(
            options=options,
            requested_language=language,
            dry_run=dry_run,
            force=force
        )

        final_state = self.graph.invoke(initial_state)

        # LangGraph returns the channel values as a dictionary
        error = final_state.get("error")
        detected = final_state.get("language")
        messages = final_state.get("messages", [])

        if self.verbose:
            print("🔍 Final state debug:")
            print(f"   - Current step: {final_state.get('current_step')}")
            print(f"   - Error: {error}")
            print(f"   - Messages: {messages}")

        return InitResult(
            success=error is None,
            language=Language(detected).value if detected else None,
            dockerfile_path=final_state.get("dockerfile_path"),
            dockerfile_content=final_state.get("dockerfile_content"),
            error=error,
            error_code=final_state.get("error_code"),
            messages=messages
        )
