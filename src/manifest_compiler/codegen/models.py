"""Generation options and result models."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from manifest_compiler.core.config import Settings


SCHEMA_LEVEL = 1


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase; dumps camelCase with `by_alias=True`."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationPhase(str, Enum):
    """Pipeline phase an error is attributed to."""

    VALIDATION = "validation"
    IMPORT = "import"
    PROPS = "props"
    FLOW = "flow"
    JSX = "jsx"
    ASSEMBLY = "assembly"
    FORMAT = "format"


# ============================================================================
# Options
# ============================================================================

class FormatterConfig(CamelModel):
    """Prettier options; every field has a default."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    semi: bool = True
    single_quote: bool = True
    tab_width: int = Field(default=2, ge=0, le=16)
    trailing_comma: Literal["none", "es5", "all"] = "es5"
    print_width: int = Field(default=80, gt=0)
    jsx_single_quote: bool = False


class GenerationOptions(CamelModel):
    """Per-call generation options."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    include_default_export: bool = True
    component_path: str = "src/components"
    file_extension: Literal[".jsx", ".tsx"] = ".jsx"
    include_react_import: bool = True
    formatter: FormatterConfig = Field(default_factory=FormatterConfig, alias="prettierConfig")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationOptions":
        return cls(
            include_default_export=settings.include_default_export,
            component_path=settings.component_path,
            file_extension=settings.file_extension,
            include_react_import=settings.include_react_import,
        )

    def merge(self, overrides: "GenerationOptions | dict[str, Any] | None") -> "GenerationOptions":
        """
        Layer overrides on top of these options.

        Only fields explicitly set on `overrides` win; the formatter record is
        merged key by key rather than replaced.
        """
        if overrides is None:
            return self
        if isinstance(overrides, dict):
            overrides = GenerationOptions.model_validate(overrides)

        data = self.model_dump()
        for name in overrides.model_fields_set:
            if name == "formatter":
                data["formatter"] = {
                    **data["formatter"],
                    **overrides.formatter.model_dump(include=overrides.formatter.model_fields_set),
                }
            else:
                data[name] = getattr(overrides, name)
        return GenerationOptions.model_validate(data)


# ============================================================================
# Diagnostics
# ============================================================================

class Diagnostic(CamelModel):
    """Non-fatal finding reported while generating."""

    code: str
    message: str
    severity: Literal["info", "warning"] = "warning"
    component_id: str | None = None
    flow_id: str | None = None


# ============================================================================
# Flow handlers
# ============================================================================

class GeneratedHandler(CamelModel):
    """Event handler compiled from one flow."""

    name: str
    code: str
    state_setters: list[str] = Field(default_factory=list)
    flow_id: str
    component_id: str


class FlowGenerationResult(CamelModel):
    """Handlers for every flow of a manifest."""

    handlers: list[GeneratedHandler] = Field(default_factory=list)
    state_setters: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    success: bool = True


# ============================================================================
# Component generation
# ============================================================================

class ErrorDetails(CamelModel):
    phase: GenerationPhase
    original_error: str | None = None


class GenerationMetadata(CamelModel):
    generated_at: str
    level: int = SCHEMA_LEVEL
    duration_ms: float | None = None
    generation_id: str | None = None


class GenerationResult(CamelModel):
    """Outcome of generating one component file."""

    success: bool
    component_id: str
    component_name: str
    code: str = ""
    filename: str = ""
    filepath: str = ""
    error: str | None = None
    error_details: ErrorDetails | None = None
    metadata: GenerationMetadata
    handlers: list[GeneratedHandler] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class BatchFailure(CamelModel):
    component_id: str
    component_name: str
    error: str


class BatchGenerationResult(CamelModel):
    """Outcome of generating several components."""

    success: bool
    results: list[GenerationResult] = Field(default_factory=list)
    success_count: int = 0
    failure_count: int = 0
    total_duration_ms: float = 0.0
    failures: list[BatchFailure] = Field(default_factory=list)


class IncrementalGenerationResult(CamelModel):
    """Batch over changed components plus ids that disappeared."""

    batch: BatchGenerationResult
    removed: list[str] = Field(default_factory=list)
