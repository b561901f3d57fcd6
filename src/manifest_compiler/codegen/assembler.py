"""Final source file assembly."""

from posixpath import join as posix_join

from .identifiers import sanitize_component_name
from .models import GenerationOptions
from .types import AssembledFile, CodeParts, INDENT


def indent_code(code: str, levels: int) -> str:
    """Indent every non-blank line; blank lines are left alone."""
    prefix = INDENT * levels
    return "\n".join(prefix + line if line.strip() else line for line in code.split("\n"))


class CodeAssembler:
    """
    Joins builder outputs into one component module.

    Layout:
        imports
        <blank>
        comment header
        export function Name(props) {
          return (
            <jsx />
          );
        }
        <blank>
        export default Name;
    """

    def build(self, parts: CodeParts, options: GenerationOptions | None = None) -> AssembledFile:
        options = options or GenerationOptions()
        name = sanitize_component_name(parts.component_name)

        sections: list[str] = []
        if parts.imports:
            sections.append(parts.imports)
            sections.append("")
        sections.append(parts.comment_header)
        sections.append(f"export function {name}({parts.props}) {{")
        sections.append(f"{INDENT}return (\n{indent_code(parts.jsx, 2)}\n{INDENT});")
        sections.append("}")

        if options.include_default_export:
            sections.append("")
            sections.append(f"export default {name};")

        filename = f"{name}{options.file_extension}"
        return AssembledFile(
            code="\n".join(sections),
            filename=filename,
            filepath=posix_join(options.component_path, filename),
        )
