# routes/common.py
import logging
from fastapi import HTTPException, Request

from repositories.errors import AlreadyAssignedError, NotFoundError, ValidationFailureError

logger = logging.getLogger(__name__)


async def read_fields(request: Request) -> dict:
    """JSON object body of a create request; an empty body means no fields."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        fields = await request.json()
    except ValueError as e:
        raise ValidationFailureError(f"Invalid JSON body: {e}") from e
    if not isinstance(fields, dict):
        raise ValidationFailureError("Request body must be a JSON object")
    return fields


def to_http_exception(error: Exception, message: str) -> HTTPException:
    """Map a repository/service failure onto the response the client sees."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, AlreadyAssignedError):
        return HTTPException(status_code=400, detail=str(error))
    logger.error(f"{message}: {error}")
    return HTTPException(status_code=500, detail={"error": message, "details": str(error)})
