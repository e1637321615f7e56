"""Resource Route Helpers — shared by products and users routes."""

from fastapi.responses import JSONResponse

from storeapi.services.resource_handler import HandlerOutcome


def respond(outcome: HandlerOutcome) -> JSONResponse:
    """Turn a HandlerOutcome into the HTTP response."""
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
