"""Typed errors raised by pipeline phases."""

from typing import ClassVar

from .models import GenerationPhase


class CodegenError(Exception):
    """Base error; each subclass names the phase that failed."""

    phase: ClassVar[GenerationPhase] = GenerationPhase.VALIDATION

    def __init__(self, message: str, component_id: str | None = None) -> None:
        super().__init__(message)
        self.component_id = component_id


class ImportBuildError(CodegenError):
    phase = GenerationPhase.IMPORT


class PropsBuildError(CodegenError):
    phase = GenerationPhase.PROPS


class FlowCompileError(CodegenError):
    phase = GenerationPhase.FLOW


class JSXBuildError(CodegenError):
    phase = GenerationPhase.JSX


class AssemblyError(CodegenError):
    phase = GenerationPhase.ASSEMBLY


class FormatError(CodegenError):
    phase = GenerationPhase.FORMAT


PHASE_ERRORS: dict[GenerationPhase, type[CodegenError]] = {
    GenerationPhase.VALIDATION: CodegenError,
    GenerationPhase.IMPORT: ImportBuildError,
    GenerationPhase.PROPS: PropsBuildError,
    GenerationPhase.FLOW: FlowCompileError,
    GenerationPhase.JSX: JSXBuildError,
    GenerationPhase.ASSEMBLY: AssemblyError,
    GenerationPhase.FORMAT: FormatError,
}
