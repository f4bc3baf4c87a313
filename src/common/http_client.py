"""Shared HTTP helpers used by the remote catalog loader.

Encapsulates request/timeout error handling so callers avoid duplicating
try/except blocks.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Timeouts and connection failures are fatal: they are logged and the
    process exits with the catalog error code.
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
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP response ok",
                    extra=extra_context(
                        event="http_response",
                        component="http_client",
                        action="GET",
                        outcome="success",
                        status_code=res.status_code,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context
                    )
                )
            return res
        except requests.Timeout:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            sys.exit(ExitCodes.CATALOG_ERROR.value)
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            sys.exit(ExitCodes.CATALOG_ERROR.value)
