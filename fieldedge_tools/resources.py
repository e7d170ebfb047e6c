# =============================================================================
# fieldedge_tools/resources.py  —  Dashboard app resources
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Advertises the pre-built FieldEdge dashboard apps as MCP resources
#   (fieldedge://app/<name>, text/html) and serves each one from
#   <ui_dir>/<name>/index.html.  Building those HTML bundles happens
#   elsewhere; if a bundle is missing the read fails with
#   "Failed to load app: <name>".
# =============================================================================

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

logger = logging.getLogger(__name__)

DEFAULT_UI_DIR = "dist/ui"
URI_PREFIX = "fieldedge://app/"


@dataclass(frozen=True)
class DashboardApp:
    slug: str                          # Directory under the UI root, last URI segment
    name: str                          # Human title shown by MCP clients
    description: str

    @property
    def uri(self) -> str:
        return f"{URI_PREFIX}{self.slug}"


DASHBOARD_APPS = (
    DashboardApp("dashboard", "FieldEdge Dashboard", "Main dashboard with key metrics and recent activity"),
    DashboardApp("customers", "Customer Management", "Browse and manage customers"),
    DashboardApp("jobs", "Job Management", "View and manage jobs/work orders"),
    DashboardApp("scheduling", "Scheduling & Dispatch", "Dispatch board and appointment scheduling"),
    DashboardApp("invoices", "Invoice Management", "Create and manage invoices"),
    DashboardApp("estimates", "Estimate/Quote Management", "Create and manage estimates"),
    DashboardApp("technicians", "Technician Management", "Manage technicians and view schedules"),
    DashboardApp("equipment", "Equipment Management", "Track customer equipment and service history"),
    DashboardApp("inventory", "Inventory Management", "Manage parts and equipment inventory"),
    DashboardApp("payments", "Payment Management", "Process payments and view payment history"),
    DashboardApp("service-agreements", "Service Agreements", "Manage maintenance contracts and service plans"),
    DashboardApp("reports", "Reports & Analytics", "View business reports and analytics"),
    DashboardApp("tasks", "Task Management", "Manage follow-ups and to-do items"),
    DashboardApp("calendar", "Calendar View", "Calendar view of appointments and jobs"),
    DashboardApp("map-view", "Map View", "Map view of jobs and technician locations"),
    DashboardApp("price-book", "Price Book Management", "Manage pricing for services and parts"),
)


def load_app_html(ui_dir: Union[str, Path], slug: str) -> str:
    """Read one app bundle.

    Raises:
        ResourceError: the bundle is missing or unreadable.
    """
    html_path = Path(ui_dir) / slug / "index.html"
    try:
        return html_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not read {html_path}: {e}")
        raise ResourceError(f"Failed to load app: {slug}") from e


def _reader(ui_dir: Union[str, Path], slug: str) -> Callable[[], str]:
    def read_app() -> str:
        return load_app_html(ui_dir, slug)
    return read_app


def register_resources(mcp: FastMCP, ui_dir: Union[str, Path] = DEFAULT_UI_DIR) -> None:
    """Register every DASHBOARD_APPS entry on ``mcp``."""
    for app in DASHBOARD_APPS:
        mcp.resource(
            app.uri,
            name=app.name,
            description=app.description,
            mime_type="text/html",
        )(_reader(ui_dir, app.slug))
