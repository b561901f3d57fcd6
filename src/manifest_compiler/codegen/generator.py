"""
Code Generator.

Drives the builders for one component at a time: binds click flows, runs the
fixed pipeline, formats the result and turns failures into failed results.
"""

import time
from typing import Any, Iterable

from manifest_compiler.core import LogContext, ValidationError, get_logger, new_batch_id, new_generation_id
from manifest_compiler.manifest import ChangeDetector, Component, Manifest
from manifest_compiler.monitoring import metrics_collector, trace_operation_async
from .assembler import CodeAssembler
from .comments import CommentHeaderBuilder, format_timestamp, utc_now
from .errors import PHASE_ERRORS, CodegenError
from .flow_compiler import FlowGraphCompiler, find_click_flow
from .formatter import Formatter, PassthroughFormatter
from .imports import ImportBuilder
from .jsx import JSXBuilder
from .models import (
    SCHEMA_LEVEL,
    BatchFailure,
    BatchGenerationResult,
    ErrorDetails,
    GeneratedHandler,
    GenerationMetadata,
    GenerationOptions,
    GenerationPhase,
    GenerationResult,
    IncrementalGenerationResult,
)
from .props import PropsBuilder
from .types import CLICK_HANDLER_PROP, BuilderContext, CodeParts, Diagnostics

logger = get_logger(__name__)

UNKNOWN_COMPONENT_NAME = "Unknown"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class CodeGenerator:
    """
    Generates React component files from a manifest.

    Builders and the formatter are passed in; anything omitted gets a default
    instance. Options given per call are layered over the instance defaults.
    """

    def __init__(
        self,
        import_builder: ImportBuilder | None = None,
        props_builder: PropsBuilder | None = None,
        flow_compiler: FlowGraphCompiler | None = None,
        jsx_builder: JSXBuilder | None = None,
        comment_builder: CommentHeaderBuilder | None = None,
        assembler: CodeAssembler | None = None,
        formatter: Formatter | None = None,
        options: GenerationOptions | None = None,
    ):
        self.import_builder = import_builder or ImportBuilder()
        self.props_builder = props_builder or PropsBuilder()
        self.flow_compiler = flow_compiler or FlowGraphCompiler()
        self.jsx_builder = jsx_builder or JSXBuilder()
        self.comment_builder = comment_builder or CommentHeaderBuilder()
        self.assembler = assembler or CodeAssembler()
        self.formatter: Formatter = formatter or PassthroughFormatter()
        self._options = options or GenerationOptions()

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    @property
    def options(self) -> GenerationOptions:
        """Instance default options."""
        return self._options

    def set_options(self, overrides: GenerationOptions | dict[str, Any]) -> None:
        """Layer overrides onto the instance defaults (formatter merged key-wise)."""
        self._options = self._options.merge(overrides)
        logger.info("options_updated", options=self._options.model_dump())

    # ------------------------------------------------------------------
    # Single component
    # ------------------------------------------------------------------

    async def generate_component(
        self,
        component: Component,
        manifest: Manifest,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> GenerationResult:
        """
        Generate the source file for one component.

        Never raises for bad input or builder failures: those come back as a
        failed result whose `error_details.phase` names the failing step.

        Args:
            component: Component to generate
            manifest: Manifest the component belongs to (children, flows)
            options: Per-call overrides of the instance options

        Returns:
            GenerationResult with code, file location, handlers and diagnostics
        """
        start = time.perf_counter()
        generation_id = new_generation_id()
        diagnostics = Diagnostics()
        phase = GenerationPhase.VALIDATION

        with LogContext(component_id=component.id, generation_id=generation_id):
            async with trace_operation_async("generate_component", component_id=component.id):
                try:
                    merged = self._options.merge(options)

                    click_flow = find_click_flow(manifest.flows, component.id)
                    context = BuilderContext(
                        component=component,
                        manifest=manifest,
                        options=merged,
                        click_handler=CLICK_HANDLER_PROP if click_flow is not None else None,
                        diagnostics=diagnostics,
                    )

                    phase = GenerationPhase.IMPORT
                    imports = self.import_builder.build(context)

                    phase = GenerationPhase.PROPS
                    props = self.props_builder.build(context)

                    phase = GenerationPhase.FLOW
                    handlers = self._compile_handlers(component, manifest, diagnostics)

                    phase = GenerationPhase.JSX
                    jsx = self.jsx_builder.build(context)

                    phase = GenerationPhase.ASSEMBLY
                    header = self.comment_builder.build(context)
                    assembled = self.assembler.build(
                        CodeParts(
                            imports=imports.code,
                            comment_header=header.code,
                            component_name=component.display_name,
                            props=props.code,
                            jsx=jsx.code,
                        ),
                        merged,
                    )

                    phase = GenerationPhase.FORMAT
                    code = await self._format(assembled.code, assembled.filename, merged, diagnostics)

                except Exception as e:
                    return self._failure(component, e, phase, start, generation_id, diagnostics)

        duration_ms = _elapsed_ms(start)
        metrics_collector.record_component("success", duration_ms / 1000)
        logger.info(
            "component_generated",
            component_id=component.id,
            filepath=assembled.filepath,
            handlers=len(handlers),
            diagnostics=len(diagnostics),
            duration_ms=round(duration_ms, 2),
        )
        return GenerationResult(
            success=True,
            component_id=component.id,
            component_name=component.display_name,
            code=code,
            filename=assembled.filename,
            filepath=assembled.filepath,
            metadata=GenerationMetadata(
                generated_at=header.timestamp,
                level=SCHEMA_LEVEL,
                duration_ms=duration_ms,
                generation_id=generation_id,
            ),
            handlers=handlers,
            diagnostics=diagnostics.items,
        )

    def _compile_handlers(
        self, component: Component, manifest: Manifest, diagnostics: Diagnostics
    ) -> list[GeneratedHandler]:
        handlers: list[GeneratedHandler] = []
        for flow in manifest.flows.values():
            if flow.trigger.component_id != component.id:
                continue
            handlers.append(self.flow_compiler.compile(flow, diagnostics))
            metrics_collector.record_flow_handler("success")
        return handlers

    async def _format(
        self,
        code: str,
        filename: str,
        options: GenerationOptions,
        diagnostics: Diagnostics,
    ) -> str:
        try:
            return await self.formatter.format(code, filename, options.formatter)
        except Exception as e:
            # Unformatted code is still valid output
            metrics_collector.record_format_failure()
            diagnostics.warn("format_failed", f"Formatting failed for {filename}: {e}")
            return code

    def _failure(
        self,
        component: Component,
        error: Exception,
        phase: GenerationPhase,
        start: float,
        generation_id: str,
        diagnostics: Diagnostics,
    ) -> GenerationResult:
        if isinstance(error, CodegenError):
            typed = error
        elif isinstance(error, ValidationError):
            typed = CodegenError(str(error), component.id)
        else:
            typed = PHASE_ERRORS[phase](str(error) or type(error).__name__, component.id)

        if phase is GenerationPhase.FLOW:
            metrics_collector.record_flow_handler("error")

        duration_ms = _elapsed_ms(start)
        metrics_collector.record_component("error", duration_ms / 1000)
        logger.error(
            "component_generation_failed",
            component_id=component.id,
            phase=typed.phase.value,
            error=str(error),
            error_type=type(error).__name__,
        )
        return GenerationResult(
            success=False,
            component_id=component.id,
            component_name=component.display_name,
            error=str(typed),
            error_details=ErrorDetails(phase=typed.phase, original_error=str(error)),
            metadata=GenerationMetadata(
                generated_at=format_timestamp(utc_now()),
                level=SCHEMA_LEVEL,
                duration_ms=duration_ms,
                generation_id=generation_id,
            ),
            diagnostics=diagnostics.items,
        )

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    async def generate_all(
        self,
        manifest: Manifest,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> BatchGenerationResult:
        """Generate every component, one at a time; failures never stop the batch."""
        return await self._run_batch(manifest.components.keys(), manifest, options)

    async def generate_selected(
        self,
        component_ids: Iterable[str],
        manifest: Manifest,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> BatchGenerationResult:
        """Generate the listed components; unknown ids become failed results."""
        return await self._run_batch(component_ids, manifest, options)

    async def generate_incremental(
        self,
        manifest: Manifest,
        detector: ChangeDetector,
        options: GenerationOptions | dict[str, Any] | None = None,
    ) -> IncrementalGenerationResult:
        """
        Regenerate only components added or modified since the detector's
        last snapshot, then move the snapshot forward for those that succeeded.
        """
        changes = detector.detect(manifest)
        batch = await self._run_batch(changes.changed, manifest, options)

        succeeded = [result.component_id for result in batch.results if result.success]
        detector.update(manifest, only=succeeded)

        logger.info(
            "incremental_generation_completed",
            changed=len(changes.changed),
            removed=len(changes.removed),
            failures=batch.failure_count,
        )
        return IncrementalGenerationResult(batch=batch, removed=changes.removed)

    async def _run_batch(
        self,
        component_ids: Iterable[str],
        manifest: Manifest,
        options: GenerationOptions | dict[str, Any] | None,
    ) -> BatchGenerationResult:
        start = time.perf_counter()
        batch_id = new_batch_id()
        results: list[GenerationResult] = []
        failures: list[BatchFailure] = []
        # filepath -> id of the component that produced it
        owners: dict[str, str] = {}

        with LogContext(batch_id=batch_id):
            for component_id in component_ids:
                component = manifest.components.get(component_id)
                if component is None:
                    result = self._missing_component(component_id)
                else:
                    result = await self.generate_component(component, manifest, options)
                    if result.success:
                        owner = owners.setdefault(result.filepath, component_id)
                        if owner != component_id:
                            result = self._filepath_collision(result, owner)
                results.append(result)

                if not result.success:
                    failures.append(
                        BatchFailure(
                            component_id=result.component_id,
                            component_name=result.component_name,
                            error=result.error or "Unknown error",
                        )
                    )

            success_count = sum(1 for result in results if result.success)
            failure_count = len(results) - success_count
            total_duration_ms = _elapsed_ms(start)

            logger.info(
                "batch_generation_completed",
                success_count=success_count,
                failure_count=failure_count,
                duration_ms=round(total_duration_ms, 2),
            )

        return BatchGenerationResult(
            success=failure_count == 0,
            results=results,
            success_count=success_count,
            failure_count=failure_count,
            total_duration_ms=total_duration_ms,
            failures=failures,
        )

    def _filepath_collision(self, result: GenerationResult, owner: str) -> GenerationResult:
        message = f'Output file "{result.filepath}" is already generated by component "{owner}"'
        logger.error(
            "filepath_collision",
            component_id=result.component_id,
            filepath=result.filepath,
            owner=owner,
        )
        return result.model_copy(
            update={
                "success": False,
                "code": "",
                "filename": "",
                "filepath": "",
                "handlers": [],
                "error": message,
                "error_details": ErrorDetails(phase=GenerationPhase.ASSEMBLY, original_error=message),
            }
        )

    def _missing_component(self, component_id: str) -> GenerationResult:
        message = f'Component "{component_id}" not found in manifest'
        logger.warning("component_not_found", component_id=component_id)
        metrics_collector.record_component("error", 0.0)
        return GenerationResult(
            success=False,
            component_id=component_id,
            component_name=UNKNOWN_COMPONENT_NAME,
            error=message,
            error_details=ErrorDetails(phase=GenerationPhase.VALIDATION, original_error=message),
            metadata=GenerationMetadata(
                generated_at=format_timestamp(utc_now()),
                level=SCHEMA_LEVEL,
                generation_id=new_generation_id(),
            ),
        )
