"""Shared HTTP helpers used by the source-hosting client.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Every failure surfaces as a LookupFailure
naming the step that was being resolved; requests are never retried.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.errors import LookupFailure
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable name of the lookup step (e.g., "branch head").
        headers: Optional request headers.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        LookupFailure: On timeouts and connection errors.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.get(url, headers=headers, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            raise LookupFailure(
                context, f"request timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise LookupFailure(context, f"connection error: {exc}") from exc
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res


def get_text(url: str, *, context: str, headers: Optional[Dict[str, str]] = None, **kwargs: Any) -> str:
    """GET ``url`` and return its body, raising LookupFailure unless it is a 200."""
    res = safe_get(url, context=context, headers=headers, **kwargs)
    if res.status_code != 200:
        raise LookupFailure(context, f"HTTP {res.status_code} from {safe_url(url)}")
    return res.text


def get_json(url: str, *, context: str, headers: Optional[Dict[str, str]] = None, **kwargs: Any) -> Any:
    """GET ``url`` and return its parsed JSON body.

    Raises:
        LookupFailure: On a non-200 status or a body that is not JSON.
    """
    res = safe_get(url, context=context, headers=headers, **kwargs)
    if res.status_code != 200:
        raise LookupFailure(context, f"HTTP {res.status_code} from {safe_url(url)}")
    try:
        return res.json()
    except ValueError as exc:  # json.JSONDecodeError and requests' variant
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    target=safe_url(url),
                ),
            )
        raise LookupFailure(context, "response was not valid JSON") from exc
