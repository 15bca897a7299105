from __future__ import annotations

import logging

from fastapi.responses import JSONResponse

from draft.errors import CONFLICT, INTERNAL, NOT_FOUND, RULE_VIOLATION, DraftError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    NOT_FOUND: 404,
    RULE_VIOLATION: 400,
    CONFLICT: 409,
    INTERNAL: 500,
}


def _draft_error_response(error: DraftError) -> JSONResponse:
    status = _STATUS_BY_KIND.get(error.kind, 500)
    if status >= 500:
        # Details of persistence failures stay in the log.
        logger.error("internal draft error: code=%s details=%s", error.code, error.details)
        payload = {
            "ok": False,
            "error": {"code": error.code, "message": "Internal error", "details": {}},
        }
        return JSONResponse(status_code=status, content=payload)

    logger.warning("draft request rejected: code=%s message=%s details=%s", error.code, error.message, error.details)
    payload = {"ok": False, "error": error.to_payload()}
    return JSONResponse(status_code=status, content=payload)
