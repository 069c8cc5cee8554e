"""
TypeScript emitter for API contracts.

Renders one artifact per contract: the ``Api`` contract type, the
``ApiClient`` interface, the ``ApiClientType`` alias and the
``createApiClient`` factory. Declaration bodies are rendered here from
the route trie; the surrounding file layout lives in a jinja2 template.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from api_sync.shared.naming import quote_key

from .contract import ContractDocument, RouteDescriptor
from .route_trie import TrieNode, build_route_trie
from .schema_types import map_type

CLIENT_MODULE: Final[str] = "@vafast/api-client"
RETURN_FALLBACK: Final[str] = "any"
INDENT: Final[str] = "  "

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"
CLIENT_TEMPLATE: Final[str] = "api_client.ts.jinja"

BASE_TYPE_IMPORTS: Final[tuple[str, ...]] = ("ApiResponse", "RequestConfig", "Client", "EdenClient")
STREAM_TYPE_IMPORTS: Final[tuple[str, ...]] = ("SSESubscription", "SSESubscribeOptions")

# Request slots listed in the contract type, in emission order
DESCRIPTOR_SLOTS: Final[tuple[str, ...]] = ("query", "body", "params")


@dataclass(frozen=True, slots=True)
class PlainCall:
    """A request/response route: resolves to a response envelope."""

    route: RouteDescriptor


@dataclass(frozen=True, slots=True)
class StreamCall:
    """A server-sent events route: returns a subscription handle."""

    route: RouteDescriptor


RouteCall = PlainCall | StreamCall


@dataclass
class GeneratorContext:
    """Context for code generation with the compiled client template."""
    template_env: Environment = field(init=False)
    _client_template: Any = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self._client_template = self.template_env.get_template(CLIENT_TEMPLATE)

    @property
    def client_template(self):
        return self._client_template


def classify_route(route: RouteDescriptor) -> RouteCall:
    return StreamCall(route) if route.sse else PlainCall(route)


def return_type(route: RouteDescriptor) -> str:
    response = route.schema.response
    return map_type(response) if response is not None else RETURN_FALLBACK


def generate_method_type(route: RouteDescriptor, indent: int = 1) -> str:
    """Render the structural descriptor of a route for the ``Api`` type.

    ``indent`` is the nesting level of the method entry the descriptor
    belongs to; the closing brace is aligned with it.
    """
    parts = [
        f"{slot}: {map_type(node)}"
        for slot in DESCRIPTOR_SLOTS
        if (node := getattr(route.schema, slot)) is not None
    ]
    parts.append(f"return: {return_type(route)}")

    if len(parts) == 1:
        return f"{{ {parts[0]} }}"

    inner = INDENT * (indent + 1)
    body = "\n".join(f"{inner}{part}" for part in parts)
    return f"{{\n{body}\n{INDENT * indent}}}"


def generate_method_signature(route: RouteDescriptor) -> str:
    """Render the callable signature of a route for the ``ApiClient`` interface.

    Path parameters are filled in through the dynamic ``:id`` segment of the
    client tree, so ``params`` only appears in the structural ``Api`` type.
    """
    schema = route.schema
    result = return_type(route)
    params: list[str] = []

    if schema.body is not None:
        params.append(f"body: {map_type(schema.body)}")

    match classify_route(route):
        case PlainCall():
            if schema.query is not None:
                params.append(f"query?: {map_type(schema.query)}")
            params.append("config?: RequestConfig")
            result_type = f"Promise<ApiResponse<{result}>>"
        case StreamCall():
            if schema.query is not None:
                params.append(f"query: {map_type(schema.query)}")
            params.append(f"callbacks: SSECallbacks<{result}>")
            params.append("options?: SSESubscribeOptions")
            result_type = f"SSESubscription<{result}>"

    return f"({', '.join(params)}) => {result_type}"


def _doc_text(text: str) -> str:
    # A literal "*/" would close the doc comment early
    return text.replace("*/", "*\\/")


def _render_tree(
    tree: Mapping[str, TrieNode],
    indent: int,
    render_route: Callable[[RouteDescriptor, int], str],
) -> list[str]:
    lines: list[str] = []
    pad = INDENT * indent

    for key, node in tree.items():
        lines.append(f"{pad}{quote_key(key)}: {{")

        for method, route in node.methods.items():
            if route.description:
                lines.append(f"{pad}{INDENT}/** {_doc_text(route.description)} */")
            lines.append(f"{pad}{INDENT}{quote_key(method)}: {render_route(route, indent + 1)}")

        lines.extend(_render_tree(node.children, indent + 1, render_route))
        lines.append(f"{pad}}}")

    return lines


def generate_route_tree_type(tree: Mapping[str, TrieNode], indent: int = 1) -> str:
    """Render the body of the ``Api`` contract type."""
    return "\n".join(_render_tree(tree, indent, generate_method_type))


def generate_client_type(tree: Mapping[str, TrieNode], indent: int = 1) -> str:
    """Render the body of the ``ApiClient`` interface."""
    return "\n".join(_render_tree(tree, indent, lambda route, _: generate_method_signature(route)))


def has_streaming_routes(routes: Iterable[RouteDescriptor]) -> bool:
    return any(route.sse for route in routes)


def generate_type_definition(
    contract: ContractDocument,
    prefix: str | None = None,
    ctx: GeneratorContext | None = None,
) -> str:
    """Render the complete TypeScript artifact for a contract.

    Args:
        contract: The decoded contract document.
        prefix: Optional path prefix stripped from every route.
        ctx: Generator context to reuse; a fresh one is created if omitted.

    Returns:
        The generated TypeScript source.
    """
    ctx = ctx or GeneratorContext()
    use_streaming = has_streaming_routes(contract.routes)
    tree = build_route_trie(contract.routes, prefix)

    type_imports = list(BASE_TYPE_IMPORTS)
    if use_streaming:
        type_imports.extend(STREAM_TYPE_IMPORTS)

    return ctx.client_template.render(
        version=contract.version,
        generated_at=contract.generated_at,
        client_module=CLIENT_MODULE,
        type_imports=type_imports,
        use_streaming=use_streaming,
        api_body=generate_route_tree_type(tree),
        client_body=generate_client_type(tree),
    )
