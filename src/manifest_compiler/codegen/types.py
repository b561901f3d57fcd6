"""Shared builder context, build results and element tables."""

from dataclasses import dataclass, field

from manifest_compiler.core import get_logger
from manifest_compiler.manifest import Component, Manifest
from manifest_compiler.monitoring import metrics_collector
from .models import Diagnostic, GenerationOptions

logger = get_logger(__name__)


# ============================================================================
# Element tables
# ============================================================================

# Void elements: rendered as <tag />, never given children
SELF_CLOSING_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Virtual component types rendered as a different element
VIRTUAL_TYPE_TAGS: dict[str, str] = {
    "checkbox": "input",
    "icon": "span",
}

# Literal attributes a virtual type adds to its element
VIRTUAL_TYPE_ATTRIBUTES: dict[str, str] = {
    "checkbox": 'type="checkbox"',
}

TEXT_TYPE = "text"
TEXT_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5", "h6", "span"})
DEFAULT_TEXT_TAG = "p"

# Prop names that are spelled differently as JSX attributes
PROP_NAME_MAPPINGS: dict[str, str] = {
    "class": "className",
    "for": "htmlFor",
}

# Standard attributes passed through to the element as `attr={prop}`
ELEMENT_ATTRIBUTES = frozenset({
    "id", "className", "htmlFor", "style", "title", "href", "src", "alt",
    "type", "name", "value", "placeholder", "disabled", "checked",
    "readOnly", "required", "min", "max", "step", "pattern", "maxLength",
    "minLength", "rows", "cols", "autoComplete", "autoFocus", "tabIndex",
    "target", "rel", "download", "role", "aria-label", "aria-hidden",
    "aria-describedby", "data-testid",
})

# Props rendered as element content, in priority order
TEXT_CONTENT_PROPS = ("children", "label", "text", "content")

CLICK_EVENT_TYPES = frozenset({"onClick", "click"})
CLICK_HANDLER_PROP = "onClick"

INDENT = "  "


class CommentMarkers:
    """Markers written into generated files for sync tooling."""

    GENERATED = "@lowcode:generated"
    COMPONENT_ID = "@lowcode:component-id"
    LEVEL = "@lowcode:level"
    LAST_GENERATED = "@lowcode:last-generated"
    HANDLER = "@lowcode:handler"
    DO_NOT_EDIT = "DO NOT EDIT: This file is auto-generated. Changes will be overwritten."


def is_self_closing_tag(tag: str) -> bool:
    return tag.lower() in SELF_CLOSING_TAGS


def is_element_attribute(name: str) -> bool:
    return name in ELEMENT_ATTRIBUTES


# ============================================================================
# Diagnostics channel
# ============================================================================

class Diagnostics:
    """Collects non-fatal findings for one generation call."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def warn(
        self,
        code: str,
        message: str,
        component_id: str | None = None,
        flow_id: str | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            code=code, message=message, component_id=component_id, flow_id=flow_id
        )
        # Builders walking the same children report the same finding once
        if diagnostic in self._items:
            return diagnostic
        self._items.append(diagnostic)
        metrics_collector.record_diagnostic(code)
        logger.warning(code, message=message, component_id=component_id, flow_id=flow_id)
        return diagnostic

    @property
    def items(self) -> list[Diagnostic]:
        return list(self._items)

    def codes(self) -> list[str]:
        return [d.code for d in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)


# ============================================================================
# Builder context and results
# ============================================================================

@dataclass
class BuilderContext:
    """
    State shared by the builders for one component.

    A fresh context is created per generation call; `click_handler` is the
    event prop token decided once by the orchestrator so props and JSX agree.
    """

    component: Component
    manifest: Manifest
    options: GenerationOptions = field(default_factory=GenerationOptions)
    indent_level: int = 0
    click_handler: str | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass(frozen=True)
class ImportBuildResult:
    code: str
    imported_components: list[str]


@dataclass(frozen=True)
class PropsBuildResult:
    code: str
    prop_names: list[str]
    has_props: bool


@dataclass(frozen=True)
class JSXBuildResult:
    code: str
    is_self_closing: bool
    child_components: list[str]


@dataclass(frozen=True)
class CommentHeaderBuildResult:
    code: str
    timestamp: str


@dataclass(frozen=True)
class CodeParts:
    """Builder outputs handed to the assembler."""

    imports: str
    comment_header: str
    component_name: str
    props: str
    jsx: str


@dataclass(frozen=True)
class AssembledFile:
    code: str
    filename: str
    filepath: str
