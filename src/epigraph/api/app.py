"""
HTTP surface for the store-message action.

GET describes the action, POST builds the transaction, OPTIONS answers
CORS preflight. Every response, errors included, carries the CORS headers
so browser wallets can read the body.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from .. import __version__
from ..errors import EpigraphError, MetadataValidationError, MissingParameterError
from ..handler import build_and_serialize
from ..settings import Settings
from ..spec.metadata import ACTION_PATH, describe

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"
PREFLIGHT_ALLOW_HEADERS = (
    "Content-Type, Authorization, X-CSRF-Token, X-Requested-With, Accept, "
    "Accept-Version, Content-Length, Content-MD5, Date, X-Api-Version"
)

DESCRIBE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOW_METHODS,
}
INVOKE_HEADERS = {**DESCRIBE_HEADERS, "Access-Control-Allow-Headers": ALLOW_HEADERS}
PREFLIGHT_HEADERS = {**DESCRIBE_HEADERS, "Access-Control-Allow-Headers": PREFLIGHT_ALLOW_HEADERS}


def resolve_base_url(request: Request, override: Optional[str] = None) -> str:
    """Public base URL: the configured override, else derived from forwarding headers."""
    if override:
        return override.rstrip("/")
    headers = request.headers
    proto = headers.get("x-forwarded-proto", "").split(",")[0].strip() or request.url.scheme
    host = (
        headers.get("x-forwarded-host", "").split(",")[0].strip()
        or headers.get("host", "").strip()
        or request.url.netloc
    )
    return f"{proto}://{host}"


def _error(message: str, status_code: int, headers: dict[str, str]) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI app serving the action at ACTION_PATH."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Epigraph", version=__version__)
    app.state.settings = settings

    @app.get(ACTION_PATH)
    def describe_action(request: Request) -> JSONResponse:
        base_url = resolve_base_url(request, settings.base_url)
        try:
            descriptor = describe(base_url, settings)
        except MetadataValidationError as exc:
            logger.error("Action metadata failed validation: %s", "; ".join(exc.errors))
            return _error("Failed to create metadata", 500, DESCRIBE_HEADERS)
        except Exception:
            logger.exception("Failed to create action metadata")
            return _error("Failed to create metadata", 500, DESCRIBE_HEADERS)
        return JSONResponse(descriptor.to_dict(), headers=DESCRIBE_HEADERS)

    @app.post(ACTION_PATH)
    def invoke_action(request: Request) -> JSONResponse:
        message = request.query_params.get("message")
        try:
            response = build_and_serialize(message, settings)
        except MissingParameterError as exc:
            logger.info("Rejected invocation: %s", exc)
            return _error(str(exc), exc.status_code, INVOKE_HEADERS)
        except EpigraphError as exc:
            logger.error("Failed to build transaction: %s", exc)
            return _error("Internal Server Error", exc.status_code, INVOKE_HEADERS)
        except Exception:
            logger.exception("Error in POST request")
            return _error("Internal Server Error", 500, INVOKE_HEADERS)
        body: dict[str, Any] = response.to_dict()
        return JSONResponse(body, status_code=200, headers=INVOKE_HEADERS)

    @app.options(ACTION_PATH)
    def preflight() -> Response:
        return Response(status_code=204, headers=PREFLIGHT_HEADERS)

    return app
