"""Translation of domain exceptions into HTTP responses."""

import logging

import falcon
import falcon.asgi

from synjar.domain.exceptions import InvalidStateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


async def _validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def _not_found(req, resp, ex: NotFoundError, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def _invalid_state(req, resp, ex: InvalidStateError, params) -> None:
    resp.status = falcon.HTTP_409
    resp.media = {"error": str(ex)}


async def _unexpected(req, resp, ex: Exception, params) -> None:
    logger.error(
        "Unhandled error on %s %s", req.method, req.path, exc_info=(type(ex), ex, ex.__traceback__)
    )
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Map domain errors to 400/404/409 and everything else to a logged 500.

    Falcon picks the most specific handler, so ``HTTPError`` keeps its
    default rendering.
    """
    app.add_error_handler(Exception, _unexpected)
    app.add_error_handler(ValidationError, _validation_error)
    app.add_error_handler(NotFoundError, _not_found)
    app.add_error_handler(InvalidStateError, _invalid_state)
