"""Accept-Language negotiation for labels and report exports."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backend.app.core.config import settings

SUPPORTED_LANGUAGES = {"es", "en"}


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve the request language into ``request.state.language``.

    The answer is echoed back in ``Content-Language`` so clients can tell
    which labels they received.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = parse_preferred(request.headers.get("Accept-Language", ""))
        request.state.language = language

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response


def _weighted_tags(header: str) -> list[tuple[float, int, str]]:
    tags = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag:
            continue
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        tags.append((-weight, position, tag.strip().lower()))
    return sorted(tags)


def parse_preferred(header: str) -> str:
    """Highest-weighted supported language, else the configured default."""
    for neg_weight, _, tag in _weighted_tags(header):
        if neg_weight >= 0:
            break
        # "es-VE" counts as "es"
        primary = tag.split("-")[0]
        if primary in SUPPORTED_LANGUAGES:
            return primary
    return settings.DEFAULT_LANGUAGE


def request_language(request: Request, override: str | None = None) -> str:
    """An explicit ``lang`` query value wins over the negotiated header."""
    if override in SUPPORTED_LANGUAGES:
        return override  # type: ignore[return-value]
    return getattr(request.state, "language", settings.DEFAULT_LANGUAGE)
