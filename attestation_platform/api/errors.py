"""Translation of domain errors into RFC 7807 HTTP errors."""

from fastapi import HTTPException, Request

from attestation_platform.domain.errors import InvalidPayloadError, LedgerError

INVALID_PAYLOAD_TYPE = "urn:attestation:ledger:invalid-payload"


def ledger_http_error(exc: LedgerError, request: Request) -> HTTPException:
    detail = exc.to_rfc7807_dict()
    detail["instance"] = str(request.url)
    return HTTPException(status_code=exc.status, detail=detail)


def invalid_payload_http_error(exc: InvalidPayloadError, request: Request) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "type": INVALID_PAYLOAD_TYPE,
            "title": "Invalid Payload",
            "status": 422,
            "detail": str(exc),
            "instance": str(request.url),
            "field": exc.field,
        },
    )
