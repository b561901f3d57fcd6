"""Manifest Data Models.

Components, properties and logic flows as read from a project manifest.
JSON uses camelCase keys; attributes are snake_case.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


PropertyDataType = Literal["string", "number", "boolean", "object", "array"]
LiteralValue = str | int | float | bool | None


class ManifestModel(BaseModel):
    """Base model: camelCase aliases, read-only, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ============================================================================
# Component properties
# ============================================================================

class StaticProperty(ManifestModel):
    """Fixed value set in the editor."""

    type: Literal["static"] = "static"
    value: LiteralValue | list[Any] | dict[str, Any] = None
    data_type: PropertyDataType

    @property
    def has_default(self) -> bool:
        return True

    @property
    def default_value(self) -> Any:
        return self.value


class PropProperty(ManifestModel):
    """Value passed in by the parent, optionally with a default."""

    type: Literal["prop"] = "prop"
    data_type: PropertyDataType
    required: bool = False
    default: LiteralValue | list[Any] | dict[str, Any] = None
    options: list[str] | None = None
    description: str | None = None

    @property
    def has_default(self) -> bool:
        """An explicit `null` default counts; a missing key does not."""
        return "default" in self.model_fields_set

    @property
    def default_value(self) -> Any:
        return self.default


ComponentProperty = Annotated[Union[StaticProperty, PropProperty], Field(discriminator="type")]


class ComponentStyling(ManifestModel):
    """Class list and inline style map."""

    base_classes: list[str] = Field(default_factory=list)
    inline_styles: dict[str, str | int | float] = Field(default_factory=dict)


class Component(ManifestModel):
    """A node of the component tree."""

    id: str
    display_name: str
    type: str
    properties: dict[str, ComponentProperty] = Field(default_factory=dict)
    styling: ComponentStyling = Field(default_factory=ComponentStyling)
    children: list[str] = Field(default_factory=list)


# ============================================================================
# Logic flows
# ============================================================================

class StaticValue(ManifestModel):
    """Literal value carried by an action node."""

    type: Literal["static"] = "static"
    value: str | int | float | bool


class FlowTrigger(ManifestModel):
    """Binds a flow to one UI event on one component."""

    component_id: str
    type: str


class FlowEdge(ManifestModel):
    """Execution dependency: `source` runs before `target`."""

    id: str | None = None
    source: str
    target: str


class EventConfig(ManifestModel):
    event_type: str = "onClick"
    component_id: str | None = None


class SetStateConfig(ManifestModel):
    variable: str
    value: StaticValue


class AlertConfig(ManifestModel):
    message: StaticValue


class ConsoleConfig(ManifestModel):
    level: Literal["log", "info", "warn", "error", "debug"] = "log"
    message: StaticValue


class EventNode(ManifestModel):
    """The trigger node of a flow."""

    id: str
    type: Literal["event"] = "event"
    config: EventConfig = Field(default_factory=EventConfig)


class SetStateNode(ManifestModel):
    id: str
    type: Literal["setState"] = "setState"
    config: SetStateConfig


class AlertNode(ManifestModel):
    id: str
    type: Literal["alert"] = "alert"
    config: AlertConfig


class ConsoleNode(ManifestModel):
    id: str
    type: Literal["console"] = "console"
    config: ConsoleConfig


class UnknownNode(ManifestModel):
    """Any node type this compiler does not emit code for."""

    id: str
    type: str
    config: dict[str, Any] = Field(default_factory=dict)


KNOWN_NODE_TYPES = frozenset({"event", "setState", "alert", "console"})


def _node_tag(value: Any) -> str:
    node_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return node_type if node_type in KNOWN_NODE_TYPES else "unknown"


FlowNode = Annotated[
    Union[
        Annotated[EventNode, Tag("event")],
        Annotated[SetStateNode, Tag("setState")],
        Annotated[AlertNode, Tag("alert")],
        Annotated[ConsoleNode, Tag("console")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]

ActionNode = SetStateNode | AlertNode | ConsoleNode | UnknownNode


class Flow(ManifestModel):
    """Event-to-actions graph bound to one trigger."""

    id: str
    name: str = ""
    trigger: FlowTrigger
    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)


class Manifest(ManifestModel):
    """Component tree plus logic flows."""

    components: dict[str, Component] = Field(default_factory=dict)
    flows: dict[str, Flow] = Field(default_factory=dict)
