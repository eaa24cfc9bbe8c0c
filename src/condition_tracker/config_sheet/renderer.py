"""Render the config document: tab navigation, headings and tab content."""

from __future__ import annotations

from ..defaults import INSTRUCTIONS_CONTENT
from ..models import ConfigTab

CONFIG_NAME = "ConditionTracker Config"

_NAV_TAB_STYLE = "padding: 10px; border-radius: 25px; margin-right: 10px;"
_NAV_ACTIVE_STYLE = "background-color: #e4dfff;"

_TAB_LABELS = {
    ConfigTab.INSTRUCTIONS: "Instructions",
    ConfigTab.CONDITIONS: "Conditions",
}


def render_nav_tabs(current_tab: ConfigTab | None) -> str:
    links = []
    for tab, label in _TAB_LABELS.items():
        style = f"{_NAV_TAB_STYLE} {_NAV_ACTIVE_STYLE if tab == current_tab else ''}"
        links.append(f"<a href='!ct config|{tab.value}' style='{style}'>{label}</a>")
    return f"<div style='margin-bottom: 20px;'>{''.join(links)}</div>"


def render_header(tab: ConfigTab) -> str:
    """Everything above the tab content."""
    header = render_nav_tabs(tab) + f"<h1>{CONFIG_NAME}</h1>"
    if tab == ConfigTab.CONDITIONS:
        header += "<h2>Conditions Table</h2>"
    return header


def render_document(tab: ConfigTab, conditions_content: str) -> str:
    """Full config document for ``tab``."""
    if tab == ConfigTab.CONDITIONS:
        return render_header(tab) + conditions_content
    return render_header(tab) + INSTRUCTIONS_CONTENT
