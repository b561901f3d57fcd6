"""
Flow Graph Compiler.

Turns a logic flow (trigger + action nodes + ordering edges) into a
JavaScript arrow-function event handler. Action nodes run in dependency
order; a cyclic graph falls back to declaration order and is reported.
"""

import re
from collections import deque
from typing import Iterable, Mapping

from manifest_compiler.core import get_logger
from manifest_compiler.manifest import (
    ActionNode,
    AlertNode,
    ConsoleNode,
    EventNode,
    Flow,
    FlowEdge,
    FlowNode,
    SetStateNode,
    UnknownNode,
)
from manifest_compiler.monitoring import metrics_collector
from .identifiers import capitalize, sanitize_prop_name
from .literals import comment_text, format_flow_value
from .models import FlowGenerationResult, GeneratedHandler
from .types import CLICK_EVENT_TYPES, INDENT, CommentMarkers, Diagnostics

logger = get_logger(__name__)

_NAME_INVALID = re.compile(r"[^A-Za-z0-9\s]")

DEFAULT_HANDLER_BASE = "Click"
EMPTY_BODY = "// No actions defined"


class FlowGraphCompiler:
    """Compiles flows into handler functions"""

    def handler_name(self, flow: Flow) -> str:
        """
        Handler function name for a flow.

        "Button Click!" -> "handleButtonClick"; an empty name gives "handleClick".
        """
        words = _NAME_INVALID.sub("", flow.name).split()
        base = "".join(word[:1].upper() + word[1:].lower() for word in words)
        return f"handle{base or DEFAULT_HANDLER_BASE}"

    def handler_name_for_component(
        self, flows: Mapping[str, Flow], component_id: str
    ) -> str | None:
        """Name of the click handler bound to a component, if any."""
        flow = find_click_flow(flows, component_id)
        return self.handler_name(flow) if flow is not None else None

    def compile(self, flow: Flow, diagnostics: Diagnostics | None = None) -> GeneratedHandler:
        """
        Compile one flow.

        Args:
            flow: Flow to compile
            diagnostics: Channel for cycle reports; a private one is used if omitted

        Returns:
            GeneratedHandler with code and the state setters it calls
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        name = self.handler_name(flow)

        actions: list[ActionNode] = [node for node in flow.nodes if not isinstance(node, EventNode)]
        ordered = self._sort_actions(flow, actions, diagnostics)

        setters: list[str] = []
        statements = [self._emit(node, setters) for node in ordered]

        logger.debug("flow_compiled", flow_id=flow.id, handler=name, statements=len(statements))
        return GeneratedHandler(
            name=name,
            code=self._render_handler(name, statements),
            state_setters=setters,
            flow_id=flow.id,
            component_id=flow.trigger.component_id,
        )

    def generate_all(self, flows: Mapping[str, Flow]) -> FlowGenerationResult:
        """
        Compile every flow independently.

        A flow that fails is reported in `warnings` and does not stop the
        others. The run counts as successful if nothing failed or at least
        one handler was produced.
        """
        handlers: list[GeneratedHandler] = []
        setters: set[str] = set()
        warnings: list[str] = []
        failed = False

        for flow in flows.values():
            diagnostics = Diagnostics()
            try:
                handler = self.compile(flow, diagnostics)
            except Exception as e:
                failed = True
                metrics_collector.record_flow_handler("error")
                logger.warning("flow_compile_failed", flow_id=flow.id, error=str(e))
                warnings.append(f'Failed to generate handler for flow "{flow.name}" ({flow.id}): {e}')
                continue

            metrics_collector.record_flow_handler("success")
            handlers.append(handler)
            setters.update(handler.state_setters)
            warnings.extend(d.message for d in diagnostics)

        return FlowGenerationResult(
            handlers=handlers,
            state_setters=sorted(setters),
            warnings=warnings,
            success=not failed or bool(handlers),
        )

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def _sort_actions(
        self,
        flow: Flow,
        actions: list[ActionNode],
        diagnostics: Diagnostics,
    ) -> list[ActionNode]:
        order = topological_order([node.id for node in actions], flow.edges)
        if order is None:
            diagnostics.warn(
                "flow_cycle",
                f'Flow "{flow.name}" ({flow.id}) has a cycle; actions run in declaration order',
                flow_id=flow.id,
                component_id=flow.trigger.component_id,
            )
            return actions
        return [actions[index] for index in order]

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit(self, node: FlowNode, setters: list[str]) -> str:
        if isinstance(node, SetStateNode):
            setter = "set" + capitalize(sanitize_prop_name(node.config.variable))
            if setter not in setters:
                setters.append(setter)
            return f"{setter}({format_flow_value(node.config.value.value)});"
        if isinstance(node, AlertNode):
            return f"alert({format_flow_value(node.config.message.value)});"
        if isinstance(node, ConsoleNode):
            return f"console.{node.config.level}({format_flow_value(node.config.message.value)});"
        if isinstance(node, UnknownNode):
            return f"// Unknown node type: {comment_text(node.type)}"
        raise TypeError(f"Unsupported flow node: {type(node).__name__}")

    def _render_handler(self, name: str, statements: list[str]) -> str:
        body = statements or [EMPTY_BODY]
        lines = [
            "/**",
            f" * {CommentMarkers.HANDLER}",
            " * Auto-generated event handler from visual logic flow",
            " */",
            f"const {name} = () => {{",
            *(INDENT + statement for statement in body),
            "};",
        ]
        return "\n".join(lines)


def topological_order(node_ids: list[str], edges: Iterable[FlowEdge]) -> list[int] | None:
    """
    Kahn's algorithm over positions in `node_ids`.

    Only edges whose endpoints are both in `node_ids` count. Ready nodes are
    taken in declaration order.

    Returns:
        Positions in execution order, or None if the graph has a cycle
    """
    positions: dict[str, list[int]] = {}
    for index, node_id in enumerate(node_ids):
        positions.setdefault(node_id, []).append(index)

    in_degree = [0] * len(node_ids)
    successors: list[list[int]] = [[] for _ in node_ids]
    for edge in edges:
        if edge.source not in positions or edge.target not in positions:
            continue
        for source in positions[edge.source]:
            for target in positions[edge.target]:
                successors[source].append(target)
                in_degree[target] += 1

    queue = deque(index for index, degree in enumerate(in_degree) if degree == 0)
    order: list[int] = []
    while queue:
        index = queue.popleft()
        order.append(index)
        for target in successors[index]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)

    if len(order) < len(node_ids):
        return None
    return order


def find_click_flow(flows: Mapping[str, Flow], component_id: str) -> Flow | None:
    """First flow triggered by a click on `component_id`."""
    for flow in flows.values():
        if flow.trigger.component_id == component_id and flow.trigger.type in CLICK_EVENT_TYPES:
            return flow
    return None
