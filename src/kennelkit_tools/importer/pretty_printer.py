"""
Rendering canonical records as Python declarations.

Output is deterministic: top-level keys follow SORT_ORDER and then sort
alphabetically, so importing the same resources twice produces the same text
no matter how the API ordered the fields. Every setting is wrapped in
'lambda self: ...' because declarations are evaluated lazily when loaded.

Example output:
    Monitor(
        self,
        name=lambda self: 'CPU high',
        id=lambda self: 123,
        kennel_id=lambda self: 'cpu-high',
        query=lambda self: f'avg(last_5m):avg:system.cpu.user{{*}} > {self.critical}',
        critical=lambda self: 90
    )
"""

import keyword
from typing import Any, Dict, Tuple

from kennelkit.models import ModelDescriptor

from .normalizer import TITLES, QueryTemplate

SORT_ORDER: Tuple[str, ...] = TITLES + (
    "id",
    "kennel_id",
    "type",
    "tags",
    "query",
    "message",
    "description",
    "template_variables",
)

INDENT = 4


def sort_key(key: str) -> Tuple[int, str]:
    """Important keys first, everything else alphabetically after them."""
    try:
        return (SORT_ORDER.index(key), key)
    except ValueError:
        return (len(SORT_ORDER), key)


def render(record: Dict[str, Any]) -> str:
    """Render the settings of a canonical record, one per line or block."""
    pad = " " * INDENT
    lines = [f"{pad}{key}=lambda self: {render_value(key, record[key])}" for key in sorted(record, key=sort_key)]
    return ",\n".join(lines)


def render_declaration(model: ModelDescriptor, record: Dict[str, Any]) -> str:
    """Render a full constructor call for one canonical record."""
    pad = " " * INDENT
    return f"{model.name}(\n{pad}self,\n{render(record)}\n)"


def render_value(key: str, value: Any) -> str:
    if isinstance(value, QueryTemplate):
        return _render_query_template(value)
    if isinstance(value, dict) or (isinstance(value, (list, tuple)) and not all(isinstance(v, str) for v in value)):
        return render_structure(value, INDENT)
    if key == "message" and isinstance(value, str):
        return render_message(value, INDENT)
    return repr(value)


def render_structure(value: Any, indent: int) -> str:
    """
    Pretty print nested mappings and sequences as Python literals.

    Mappings whose keys are all identifiers render as dict(key=value) so the
    keys read like settings; other mappings use quoted keys.
    """
    pad = " " * indent
    inner = " " * (indent + INDENT)

    if isinstance(value, dict):
        if not value:
            return "{}"
        if all(_is_identifier(k) for k in value):
            items = [f"{inner}{k}={render_structure(v, indent + INDENT)}" for k, v in value.items()]
            return "dict(\n" + ",\n".join(items) + f"\n{pad})"
        items = [f"{inner}{k!r}: {render_structure(v, indent + INDENT)}" for k, v in value.items()]
        return "{\n" + ",\n".join(items) + f"\n{pad}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{inner}{render_structure(v, indent + INDENT)}" for v in value]
        return "[\n" + ",\n".join(items) + f"\n{pad}]"

    return repr(value)


def render_message(message: str, indent: int) -> str:
    """
    Render multi-line text as a dedented triple-quoted block.

    Blank lines stay empty, every other line is indented one level deeper
    than the setting. The closing quotes get a line of their own only when
    the message ends with a newline, so the block evaluates to the message.
    """
    pad = " " * indent
    inner = " " * (indent + INDENT)
    lines = []
    for line in message.splitlines():
        if not line.strip():
            lines.append("")
        else:
            lines.append(inner + _escape_message_line(line))

    if message.endswith(("\n", "\r")) or not lines:
        body = "".join(line + "\n" for line in lines)
        return f'textwrap.dedent(\n{inner}"""\\\n{body}{inner}"""\n{pad})'

    last = message.splitlines()[-1]
    if lines[-1] and last.endswith('"'):
        # a quote right before the closing quotes would end the string early
        unquoted = last.rstrip('"')
        lines[-1] = inner + _escape_message_line(unquoted) + '\\"' * (len(last) - len(unquoted))
    body = "\n".join(lines)
    return f'textwrap.dedent(\n{inner}"""\\\n{body}"""\n{pad})'


def _escape_message_line(line: str) -> str:
    return line.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def _render_query_template(query: QueryTemplate) -> str:
    placeholder = "{" + QueryTemplate.FIELD + "}"
    source = query[: -len(placeholder)] + "{self." + QueryTemplate.FIELD + "}"
    return "f" + repr(source)


def _is_identifier(key: Any) -> bool:
    return isinstance(key, str) and key.isidentifier() and not keyword.iskeyword(key)
