"""Board templates."""

from promboard.dashboards.templates.nodes import (
    NODES_BOARD_SLUG,
    NODES_BOARD_TEMPLATE,
    NODES_BOARD_TITLE,
)

__all__ = ["NODES_BOARD_SLUG", "NODES_BOARD_TEMPLATE", "NODES_BOARD_TITLE"]
