"""Server-rendered pages — roster, candidate detail, comparison, donate."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from kandidato.errors import KandidatoError
from kandidato.roster import find_candidate
from kandidato.web.presentation import active_tab, templates

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

SAME_CANDIDATE_MESSAGE = "Please select two different candidates."


def _render(request: Request, template_name: str, status_code: int = 200, **context) -> HTMLResponse:
    settings = request.app.state.settings
    return templates.TemplateResponse(
        request,
        template_name,
        {
            "adsense_client_id": settings.adsense_client_id,
            "adsense_ad_slot": settings.adsense_ad_slot,
            "adsense_test_mode": settings.adsense_test_mode,
            **context,
        },
        status_code=status_code,
    )


def _display_name(request: Request, candidate_id: str) -> str:
    entry = find_candidate(request.app.state.roster, candidate_id)
    return entry.name if entry else candidate_id


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    return _render(request, "index.html", candidates=request.app.state.roster)


@router.get("/candidate/{candidate_id}", response_class=HTMLResponse)
async def candidate_detail(
    request: Request,
    candidate_id: str,
    tab: str | None = None,
    image: str | None = None,
) -> HTMLResponse:
    """Profile tabs for one candidate; on failure only the error dialog."""
    entry = find_candidate(request.app.state.roster, candidate_id)
    name = entry.name if entry else candidate_id
    try:
        profile = await request.app.state.profile_agent.get_profile(name)
    except KandidatoError as exc:
        logger.warning("Candidate page for %s failed: %s", candidate_id, exc)
        return _render(
            request, "candidate.html", status_code=exc.status_code,
            profile=None, error=exc.public_message, entry=entry, name=name,
        )

    return _render(
        request, "candidate.html",
        profile=profile,
        entry=entry,
        name=name,
        image=(entry.image if entry and entry.image else image or ""),
        active=active_tab(tab),
        error=None,
    )


@router.get("/compare", response_class=HTMLResponse)
async def compare(
    request: Request,
    candidateA: str | None = None,
    candidateB: str | None = None,
    candidate: str | None = None,
    tab: str | None = None,
) -> HTMLResponse:
    """Comparison form, and the side-by-side result when both are chosen.

    ``candidate`` preselects the first slot (the roster's Compare button).
    """
    selected_a = (candidateA or candidate or "").strip()
    selected_b = (candidateB or "").strip()
    context = {
        "candidates": request.app.state.roster,
        "selected_a": selected_a,
        "selected_b": selected_b,
        "active": active_tab(tab),
        "result": None,
        "error": None,
    }

    if not (selected_a and selected_b):
        return _render(request, "compare.html", **context)

    if selected_a == selected_b:
        context["error"] = SAME_CANDIDATE_MESSAGE
        return _render(request, "compare.html", status_code=400, **context)

    context["names"] = [_display_name(request, selected_a), _display_name(request, selected_b)]
    try:
        context["result"] = await request.app.state.comparison_agent.compare(*context["names"])
    except KandidatoError as exc:
        logger.warning("Compare page for %s vs %s failed: %s", selected_a, selected_b, exc)
        context["error"] = exc.public_message
        return _render(request, "compare.html", status_code=exc.status_code, **context)

    return _render(request, "compare.html", **context)


@router.get("/donate", response_class=HTMLResponse)
async def donate(request: Request) -> HTMLResponse:
    return _render(request, "donate.html")
