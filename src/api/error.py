from typing import Optional

from fastapi import status
from libs.result import Error

# Access validator denial reasons -> HTTP status
ACCESS_DENIAL_STATUS = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "CROSS_TENANT": status.HTTP_403_FORBIDDEN,
    "TENANT_SUSPENDED": status.HTTP_403_FORBIDDEN,
    "INSUFFICIENT_PERMISSION": status.HTTP_403_FORBIDDEN,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def access_denial_status(error: Error) -> Optional[int]:
    return ACCESS_DENIAL_STATUS.get(error.code)
