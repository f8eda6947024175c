"""Error taxonomy shared by the handlers.

Every error is an ``HTTPException`` so FastAPI can short-circuit a request
with it; ``backend.main`` renders them as ``{"error": "<message>"}``.
"""

from fastapi import HTTPException, status

REQUIRED_FIELDS_MESSAGE = 'Todos los campos son obligatorios'


class ApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class MethodNotSupported(ApiError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class IntegrationError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_request_errors(errors) -> str:
    """Collapse pydantic/FastAPI request errors into a single client message."""
    if not errors:
        return REQUIRED_FIELDS_MESSAGE

    messages = []
    for error in errors:
        if error.get('type') in {'missing', 'none_required'}:
            return REQUIRED_FIELDS_MESSAGE

        cause = (error.get('ctx') or {}).get('error')
        message = str(cause) if isinstance(cause, ValueError) else error.get('msg', '')
        message = message.removeprefix('Value error, ')
        if message == REQUIRED_FIELDS_MESSAGE:
            return message
        messages.append(message)

    return messages[0]
