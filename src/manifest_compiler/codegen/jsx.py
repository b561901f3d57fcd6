"""JSX element builder."""

import re

from manifest_compiler.core import get_logger
from manifest_compiler.manifest import Component, StaticProperty
from .errors import JSXBuildError
from .identifiers import sanitize_prop_name
from .imports import claimed_names, resolve_child_name
from .literals import format_json_string, format_number
from .types import (
    BuilderContext,
    DEFAULT_TEXT_TAG,
    INDENT,
    JSXBuildResult,
    PROP_NAME_MAPPINGS,
    TEXT_CONTENT_PROPS,
    TEXT_TAGS,
    TEXT_TYPE,
    VIRTUAL_TYPE_ATTRIBUTES,
    VIRTUAL_TYPE_TAGS,
    CLICK_HANDLER_PROP,
    is_element_attribute,
    is_self_closing_tag,
)

logger = get_logger(__name__)

_KEBAB = re.compile(r"-([a-z])")
_ATTRIBUTE_NAME = re.compile(r"^([A-Za-z][\w:-]*)")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

# Content longer than this goes on its own line
SIMPLE_CONTENT_MAX = 50


def style_key(key: str) -> str:
    """
    Object key for a CSS property in a `style` literal.

    Kebab-case becomes camelCase; custom properties (`--brand-color`) keep
    their name. Keys that are still not identifiers are quoted.
    """
    name = key if key.startswith("--") else _KEBAB.sub(lambda m: m.group(1).upper(), key)
    return name if _IDENTIFIER.match(name) else format_json_string(name)


class JSXBuilder:
    """
    Builds the JSX element tree returned by a component.

    Output shapes:
        <div className="container"></div>
        <button className="btn" onClick={onClick}>{label}</button>
        <input className="input" placeholder={placeholder} />
        <div className="card">
          <Header />
          <Content />
        </div>
    """

    def build(self, context: BuilderContext) -> JSXBuildResult:
        """
        Build JSX for the context's component.

        Args:
            context: Builder context; `indent_level` sets the closing tag indent

        Returns:
            JSXBuildResult with the element code and rendered child names
        """
        component = context.component
        tag = self.resolve_tag(component)
        if not _TAG_NAME.match(tag):
            raise JSXBuildError(f'Component type "{component.type}" is not a valid element name', component.id)
        attributes = self._build_attributes(component, context.click_handler)
        self_closing = is_self_closing_tag(tag)
        child_components: list[str] = []

        if self_closing:
            # Void elements never get children
            code = f"<{tag}{attributes} />"
        else:
            children, is_block = self._build_children(context, child_components)
            if not children.strip():
                code = f"<{tag}{attributes}></{tag}>"
            elif not is_block and self._is_simple_content(children):
                code = f"<{tag}{attributes}>{children}</{tag}>"
            else:
                base_indent = INDENT * context.indent_level
                if not is_block:
                    children = base_indent + INDENT + children
                code = f"<{tag}{attributes}>\n{children}\n{base_indent}</{tag}>"

        logger.debug("jsx_built", component_id=component.id, tag=tag, children=len(child_components))
        return JSXBuildResult(
            code=code,
            is_self_closing=self_closing,
            child_components=child_components,
        )

    def resolve_tag(self, component: Component) -> str:
        """Element tag for a component type, virtual types included."""
        if component.type == TEXT_TYPE:
            as_prop = component.properties.get("as")
            if (
                isinstance(as_prop, StaticProperty)
                and isinstance(as_prop.value, str)
                and as_prop.value in TEXT_TAGS
            ):
                return as_prop.value
            return DEFAULT_TEXT_TAG
        return VIRTUAL_TYPE_TAGS.get(component.type, component.type)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _build_attributes(self, component: Component, click_handler: str | None) -> str:
        attrs: list[str] = []
        emitted: set[str] = set()

        def add(name: str, rendered: str) -> None:
            if name in emitted:
                return
            emitted.add(name)
            attrs.append(rendered)

        class_name = self._build_class_name(component)
        if class_name:
            if '"' in class_name:
                # JSX attribute strings have no escapes
                add("className", f"className={{{format_json_string(class_name)}}}")
            else:
                add("className", f'className="{class_name}"')

        style = self._build_style(component)
        if style:
            add("style", style)

        virtual = VIRTUAL_TYPE_ATTRIBUTES.get(component.type)
        if virtual:
            match = _ATTRIBUTE_NAME.match(virtual)
            add(match.group(1) if match else virtual, virtual)

        if click_handler:
            add(CLICK_HANDLER_PROP, f"{CLICK_HANDLER_PROP}={{{click_handler}}}")

        for prop_name in component.properties:
            attr_name = PROP_NAME_MAPPINGS.get(prop_name, prop_name)
            if not is_element_attribute(attr_name):
                continue
            add(attr_name, f"{attr_name}={{{sanitize_prop_name(prop_name)}}}")

        return " " + " ".join(attrs) if attrs else ""

    def _build_class_name(self, component: Component) -> str:
        return " ".join(c.strip() for c in component.styling.base_classes if c and c.strip())

    def _build_style(self, component: Component) -> str:
        entries: list[str] = []
        for key, value in component.styling.inline_styles.items():
            if isinstance(value, str):
                if not value:
                    continue
                rendered = format_json_string(value)
            else:
                rendered = format_number(value)
            entries.append(f"{style_key(key)}: {rendered}")

        if not entries:
            return ""
        return "style={{ " + ", ".join(entries) + " }}"

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def _build_children(
        self, context: BuilderContext, child_components: list[str]
    ) -> tuple[str, bool]:
        """Children content, and whether it is a block of child element lines."""
        component = context.component

        if component.children:
            indent = INDENT * (context.indent_level + 1)
            lines: list[str] = []
            claimed = claimed_names(context)
            for child_id in component.children:
                if not child_id:
                    continue
                name = resolve_child_name(context, child_id, claimed)
                if name is None:
                    continue
                child_components.append(name)
                lines.append(f"{indent}<{name} />")
            return "\n".join(lines), True

        text_prop = self._find_text_prop(component)
        if text_prop is not None:
            return "{" + sanitize_prop_name(text_prop) + "}", False
        return "", False

    def _find_text_prop(self, component: Component) -> str | None:
        properties = component.properties
        for name in TEXT_CONTENT_PROPS:
            if name in properties:
                return name

        string_props = [name for name, prop in properties.items() if prop.data_type == "string"]
        for name in string_props:
            lowered = name.lower()
            if "name" in lowered or "title" in lowered:
                return name
        return string_props[0] if string_props else None

    def _is_simple_content(self, content: str) -> bool:
        return "\n" not in content and len(content) < SIMPLE_CONTENT_MAX
