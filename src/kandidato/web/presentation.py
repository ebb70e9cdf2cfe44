"""Template helpers — tabs, source links and bill links for profile views."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import quote_plus

from fastapi.templating import Jinja2Templates

from kandidato.schemas.profile import Source

_TEMPLATE_DIR = Path(__file__).parent / "templates"

GOOGLE_SEARCH_URL = "https://www.google.com/search?q="
SENATE_BILL_SEARCH_URL = "https://legacy.senate.gov.ph/lis/bill_res.aspx?congress=19&q={prefix}+{number}"
MORE_ABOUT_CANDIDATES_URL = "https://www.gmanetwork.com/news/eleksyon/2025/candidates/"

TABS: tuple[tuple[str, str], ...] = (
    ("background", "Background"),
    ("stances", "Stances on Social Issues"),
    ("laws", "Laws and Bills"),
    ("policy", "Policy Focus Area"),
)

_BILL_NUMBER = re.compile(r"\b(SB|HB)\s*(?:No\.?\s*)?(\d+)", re.IGNORECASE)


def search_url(query: str) -> str:
    return GOOGLE_SEARCH_URL + quote_plus(query)


def source_href(source: Source, topic: str, candidate_name: str) -> str:
    """Link for a citation: its own URL, or a web search when it has none."""
    if source.is_verifiable:
        return source.url
    return search_url(f"{topic} {candidate_name} senate philippines")


def bill_url(bill_number: str | None) -> str | None:
    """Senate LIS search link for ``SB 123`` / ``HB 45`` style numbers."""
    if not bill_number:
        return None
    m = _BILL_NUMBER.search(bill_number)
    if not m:
        return None
    return SENATE_BILL_SEARCH_URL.format(prefix=m.group(1).upper(), number=m.group(2))


def active_tab(requested: str | None) -> str:
    keys = [key for key, _ in TABS]
    return requested if requested in keys else keys[0]


templates = Jinja2Templates(directory=str(_TEMPLATE_DIR))
templates.env.globals.update(
    TABS=TABS,
    MORE_ABOUT_CANDIDATES_URL=MORE_ABOUT_CANDIDATES_URL,
    source_href=source_href,
    bill_url=bill_url,
)
