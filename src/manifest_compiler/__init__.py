"""
Manifest Compiler
Generates React function components and event handlers from a visual
builder manifest.
"""

from manifest_compiler.codegen import CodeGenerator, GenerationOptions, GenerationResult
from manifest_compiler.manifest import Manifest, load_manifest, parse_manifest

__version__ = "0.1.0"

__all__ = [
    "CodeGenerator",
    "GenerationOptions",
    "GenerationResult",
    "Manifest",
    "load_manifest",
    "parse_manifest",
    "__version__",
]
