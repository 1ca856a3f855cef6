"""
Render the node overview board for a set of discovered instances.

The template is compiled once per process and shared read-only between
callers. Instance identifiers are escaped for the context they land in,
so any identifier yields valid JSON.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Sequence

import jinja2
import structlog

from promboard.core.errors import RenderError
from promboard.dashboards.templates.nodes import NODES_BOARD_TEMPLATE

logger = structlog.get_logger()

NODES_TEMPLATE_NAME = "nodes_board"


def json_str(value: object) -> str:
    """Escape ``value`` for use inside a JSON string literal (no quotes).

    Non-ASCII text, lone surrogates included, is emitted as ``\\u`` escapes
    so the rendered board always encodes as UTF-8.
    """
    return json.dumps(str(value))[1:-1]


def label_value(value: object) -> str:
    """Escape ``value`` as a PromQL label matcher value inside a JSON string."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return json_str(text)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        block_start_string="[%",
        block_end_string="%]",
        variable_start_string="[[",
        variable_end_string="]]",
        comment_start_string="[#",
        comment_end_string="#]",
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    env.filters["json_str"] = json_str
    env.filters["label_value"] = label_value
    return env


def compile_template(source: str, name: str) -> jinja2.Template:
    """
    Compile a board template.

    Raises:
        RenderError: If the template source does not parse
    """
    try:
        return _environment().from_string(source)
    except jinja2.TemplateSyntaxError as exc:
        logger.error("board_template_invalid", template=name, line=exc.lineno, error=exc.message)
        raise RenderError(
            "Unable to compile dashboard template",
            details={"template": name, "line": exc.lineno, "error": exc.message},
        ) from exc


@lru_cache(maxsize=1)
def nodes_template() -> jinja2.Template:
    """The compiled node overview template, built on first use."""
    return compile_template(NODES_BOARD_TEMPLATE, NODES_TEMPLATE_NAME)


def render_template(
    template: jinja2.Template,
    instances: Sequence[str],
    *,
    name: str = NODES_TEMPLATE_NAME,
) -> bytes:
    """
    Expand ``template`` once per instance.

    The template receives ``instances`` and ``last_index``; the join comma is
    emitted for every instance whose index differs from ``last_index``.

    Raises:
        RenderError: If template execution fails
    """
    instances = list(instances)
    try:
        text = template.render(instances=instances, last_index=len(instances) - 1)
    except jinja2.TemplateError as exc:
        logger.error(
            "board_render_failed",
            template=name,
            instance_count=len(instances),
            error=str(exc),
        )
        raise RenderError(
            "Unable to render dashboard template",
            details={"template": name, "instance_count": len(instances), "error": str(exc)},
        ) from exc

    logger.debug("board_rendered", template=name, instance_count=len(instances), size=len(text))
    return text.encode("utf-8")


def render_nodes_board(instances: Sequence[str]) -> bytes:
    """Render the node overview board JSON for ``instances``."""
    return render_template(nodes_template(), instances)
