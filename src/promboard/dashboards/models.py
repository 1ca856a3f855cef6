"""Grafana board models.

Raw dashboard documents are validated with pydantic. Grafana panels carry
dozens of presentation keys; the models name the few the broker reads and
keep the rest as extra fields.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Grafana-style slug: lower-case, non-alphanumeric runs become ``-``."""
    return _SLUG_STRIP.sub("-", title.lower()).strip("-")


class PanelTarget(BaseModel):
    """Query target of a panel."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    expr: Optional[str] = None
    ref_id: Optional[str] = Field(None, alias="refId")
    legend_format: Optional[str] = Field(None, alias="legendFormat")
    datasource: Optional[Any] = None


class GrafanaPanel(BaseModel):
    """A dashboard panel. Row panels may nest collapsed panels."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[int] = None
    type: Optional[str] = None
    title: str = ""
    datasource: Optional[Any] = None
    targets: List[PanelTarget] = Field(default_factory=list)
    panels: List["GrafanaPanel"] = Field(default_factory=list)

    @property
    def is_row(self) -> bool:
        return self.type == "row"

    @property
    def queries(self) -> List[str]:
        return [t.expr for t in self.targets if t.expr]


class LegacyRow(BaseModel):
    """Pre-5.0 Grafana row holding its own panel list."""

    model_config = ConfigDict(extra="allow")

    title: str = ""
    panels: List[GrafanaPanel] = Field(default_factory=list)


class TemplateVariable(BaseModel):
    """Entry of ``templating.list``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    type: Optional[str] = None
    label: Optional[str] = None
    query: Optional[Any] = None
    datasource: Optional[Any] = None
    hide: int = 0
    current: Optional[Dict[str, Any]] = None

    @property
    def current_value(self) -> Any:
        return (self.current or {}).get("value")


class Templating(BaseModel):
    model_config = ConfigDict(extra="allow")

    list: List[TemplateVariable] = Field(default_factory=list)


class TimeRange(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    from_: str = Field("now-6h", alias="from")
    to: str = "now"


class DashboardDocument(BaseModel):
    """Schema of a dashboard JSON document accepted by the importer."""

    model_config = ConfigDict(extra="allow")

    title: str
    slug: Optional[str] = None
    uid: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    panels: List[GrafanaPanel] = Field(default_factory=list)
    rows: List[LegacyRow] = Field(default_factory=list)
    templating: Templating = Field(default_factory=Templating)
    time: TimeRange = Field(default_factory=TimeRange)
    refresh: Optional[Any] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("dashboard title must not be empty")
        return value


@dataclass(frozen=True)
class BoardIdentity:
    """Lookup key a board is filed under."""

    title: str
    slug: str

    @classmethod
    def for_title(cls, title: str) -> BoardIdentity:
        return cls(title=title, slug=slugify(title))

    def __str__(self) -> str:
        return f"{self.title} ({self.slug})"


@dataclass
class Board:
    """Board as the hosting platform consumes it."""

    identity: BoardIdentity
    uid: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    panels: List[GrafanaPanel] = field(default_factory=list)
    template_vars: List[TemplateVariable] = field(default_factory=list)
    time_from: str = "now-6h"
    time_to: str = "now"
    document: Optional[DashboardDocument] = None

    @property
    def title(self) -> str:
        return self.identity.title

    @property
    def slug(self) -> str:
        return self.identity.slug

    @property
    def uri(self) -> str:
        return f"db/{self.identity.slug}"

    def panel_titles(self) -> List[str]:
        return [p.title for p in self.panels]

    def to_dict(self) -> Dict[str, Any]:
        """Summary form for API responses and the CLI."""
        return {
            "uri": self.uri,
            "title": self.title,
            "slug": self.slug,
            "uid": self.uid,
            "tags": self.tags,
            "panels": [
                {"id": p.id, "type": p.type, "title": p.title, "queries": p.queries}
                for p in self.panels
            ],
            "template_vars": [
                {"name": v.name, "query": v.query, "value": v.current_value, "hidden": v.hide > 0}
                for v in self.template_vars
            ],
            "time": {"from": self.time_from, "to": self.time_to},
        }
