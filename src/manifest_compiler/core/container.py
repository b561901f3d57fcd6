"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from manifest_compiler.codegen import (
    CodeAssembler,
    CodeGenerator,
    CommentHeaderBuilder,
    FlowGraphCompiler,
    Formatter,
    GenerationOptions,
    ImportBuilder,
    JSXBuilder,
    PassthroughFormatter,
    PrettierFormatter,
    PropsBuilder,
)
from manifest_compiler.manifest import ManifestParser
from .config import Settings, get_settings


class CodegenModule(Module):
    """Compiler dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_manifest_parser(self) -> ManifestParser:
        """Provide parser with size and depth limits from settings."""
        return ManifestParser(
            max_size=self.settings.max_manifest_size,
            max_depth=self.settings.max_manifest_depth,
        )

    @singleton
    @provider
    def provide_formatter(self) -> Formatter:
        """Provide prettier, or a passthrough when formatting is disabled."""
        if self.settings.enable_formatting:
            return PrettierFormatter(self.settings.prettier_bin)
        return PassthroughFormatter()

    @provider
    def provide_import_builder(self) -> ImportBuilder:
        return ImportBuilder()

    @provider
    def provide_props_builder(self) -> PropsBuilder:
        return PropsBuilder()

    @provider
    def provide_flow_compiler(self) -> FlowGraphCompiler:
        return FlowGraphCompiler()

    @provider
    def provide_jsx_builder(self) -> JSXBuilder:
        return JSXBuilder()

    @provider
    def provide_comment_builder(self) -> CommentHeaderBuilder:
        return CommentHeaderBuilder()

    @provider
    def provide_assembler(self) -> CodeAssembler:
        return CodeAssembler()

    @singleton
    @provider
    def provide_code_generator(
        self,
        import_builder: ImportBuilder,
        props_builder: PropsBuilder,
        flow_compiler: FlowGraphCompiler,
        jsx_builder: JSXBuilder,
        comment_builder: CommentHeaderBuilder,
        assembler: CodeAssembler,
        formatter: Formatter,
    ) -> CodeGenerator:
        """Provide code generator with all builders."""
        return CodeGenerator(
            import_builder=import_builder,
            props_builder=props_builder,
            flow_compiler=flow_compiler,
            jsx_builder=jsx_builder,
            comment_builder=comment_builder,
            assembler=assembler,
            formatter=formatter,
            options=GenerationOptions.from_settings(self.settings),
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CodegenModule(settings)])
