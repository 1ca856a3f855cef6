"""Node board synthesis and dashboard import."""

from promboard.dashboards.importer import decode_board, flatten_panels, import_board
from promboard.dashboards.models import (
    Board,
    BoardIdentity,
    DashboardDocument,
    GrafanaPanel,
    TemplateVariable,
    slugify,
)
from promboard.dashboards.renderer import (
    compile_template,
    nodes_template,
    render_nodes_board,
    render_template,
)

__all__ = [
    "Board",
    "BoardIdentity",
    "DashboardDocument",
    "GrafanaPanel",
    "TemplateVariable",
    "slugify",
    "decode_board",
    "flatten_panels",
    "import_board",
    "compile_template",
    "nodes_template",
    "render_nodes_board",
    "render_template",
]
