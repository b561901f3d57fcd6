"""
Code generation.
Builders that turn manifest components and flows into React source files.
"""

from .assembler import CodeAssembler, indent_code
from .comments import (
    CommentHeader,
    CommentHeaderBuilder,
    generate_comment_header,
    parse_comment_header,
)
from .errors import (
    AssemblyError,
    CodegenError,
    FlowCompileError,
    FormatError,
    ImportBuildError,
    JSXBuildError,
    PropsBuildError,
)
from .flow_compiler import FlowGraphCompiler, find_click_flow, topological_order
from .formatter import Formatter, PassthroughFormatter, PrettierFormatter, prettier_args
from .generator import CodeGenerator
from .identifiers import capitalize, sanitize_component_name, sanitize_prop_name
from .imports import ImportBuilder
from .jsx import JSXBuilder
from .literals import format_flow_value, format_string, format_value
from .models import (
    BatchFailure,
    BatchGenerationResult,
    Diagnostic,
    ErrorDetails,
    FlowGenerationResult,
    FormatterConfig,
    GeneratedHandler,
    GenerationMetadata,
    GenerationOptions,
    GenerationPhase,
    GenerationResult,
    IncrementalGenerationResult,
)
from .props import PropsBuilder
from .types import BuilderContext, CommentMarkers, Diagnostics

__all__ = [
    # Builders
    "ImportBuilder",
    "PropsBuilder",
    "JSXBuilder",
    "FlowGraphCompiler",
    "CommentHeaderBuilder",
    "CodeAssembler",
    "CodeGenerator",
    # Formatting
    "Formatter",
    "PrettierFormatter",
    "PassthroughFormatter",
    "prettier_args",
    # Context
    "BuilderContext",
    "Diagnostics",
    "CommentMarkers",
    # Models
    "GenerationOptions",
    "FormatterConfig",
    "GenerationPhase",
    "GenerationResult",
    "GenerationMetadata",
    "ErrorDetails",
    "BatchGenerationResult",
    "BatchFailure",
    "IncrementalGenerationResult",
    "GeneratedHandler",
    "FlowGenerationResult",
    "Diagnostic",
    # Errors
    "CodegenError",
    "ImportBuildError",
    "PropsBuildError",
    "FlowCompileError",
    "JSXBuildError",
    "AssemblyError",
    "FormatError",
    # Helpers
    "CommentHeader",
    "generate_comment_header",
    "parse_comment_header",
    "indent_code",
    "find_click_flow",
    "topological_order",
    "sanitize_component_name",
    "sanitize_prop_name",
    "capitalize",
    "format_string",
    "format_value",
    "format_flow_value",
]
