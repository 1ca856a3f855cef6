"""Import raw dashboard JSON into a Board."""

from __future__ import annotations

import json
from typing import List

import pydantic
import structlog

from promboard.core.errors import ParseError
from promboard.dashboards.models import (
    Board,
    BoardIdentity,
    DashboardDocument,
    GrafanaPanel,
    slugify,
)

logger = structlog.get_logger()


def decode_board(data: bytes | str, *, identity: BoardIdentity | None = None) -> DashboardDocument:
    """
    Decode and validate a dashboard document.

    Raises:
        ParseError: If the data is not JSON or does not match the schema
    """
    label = str(identity) if identity else "<unnamed>"
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("board_json_invalid", board=label, error=str(exc))
        raise ParseError(
            "Unable to parse dashboard JSON",
            details={"board": label, "error": str(exc)},
        ) from exc

    if not isinstance(raw, dict):
        logger.error("board_json_invalid", board=label, error="top level is not an object")
        raise ParseError(
            "Dashboard JSON must be an object",
            details={"board": label, "type": type(raw).__name__},
        )

    try:
        return DashboardDocument.model_validate(raw)
    except pydantic.ValidationError as exc:
        logger.error("board_schema_invalid", board=label, errors=exc.error_count())
        raise ParseError(
            "Dashboard JSON failed schema validation",
            details={"board": label, "error": str(exc)},
        ) from exc


def flatten_panels(document: DashboardDocument) -> List[GrafanaPanel]:
    """Panels in document order with row containers unpacked."""
    panels: List[GrafanaPanel] = []
    for panel in document.panels:
        if panel.is_row:
            panels.extend(panel.panels)
        else:
            panels.append(panel)
    for row in document.rows:
        panels.extend(row.panels)
    return panels


def import_board(data: bytes | str, identity: BoardIdentity | None = None) -> Board:
    """
    Parse raw dashboard JSON into a Board filed under ``identity``.

    When ``identity`` is omitted it is taken from the document's ``title``
    and ``slug``; a missing slug is derived from the title.

    Raises:
        ParseError: If the JSON is malformed or fails schema validation
    """
    document = decode_board(data, identity=identity)
    if identity is None:
        identity = BoardIdentity(
            title=document.title,
            slug=document.slug or slugify(document.title),
        )

    board = Board(
        identity=identity,
        uid=document.uid,
        tags=list(document.tags),
        panels=flatten_panels(document),
        template_vars=list(document.templating.list),
        time_from=document.time.from_,
        time_to=document.time.to,
        document=document,
    )
    logger.debug(
        "board_imported",
        board=str(identity),
        panels=len(board.panels),
        template_vars=len(board.template_vars),
    )
    return board
