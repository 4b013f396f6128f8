# aura/shared/errors.py
"""
Error taxonomy shared by services and repositories.

Every AuraError is rendered by the handler registered in main.py as
{"error": <kind>, "detail": <message>} with its status code.

UpstreamFailure never reaches a router: question and insight services
catch it and substitute a local fallback.
"""
from fastapi import status


class AuraError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "internal_error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.__class__.__name__


class Unauthorized(AuraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthorized"


class Forbidden(AuraError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class NotFound(AuraError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class Conflict(AuraError):
    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class UpstreamFailure(AuraError):
    status_code = status.HTTP_502_BAD_GATEWAY
    kind = "upstream_failure"


class PersistenceFailure(AuraError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "persistence_failure"
