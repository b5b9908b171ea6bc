"""Error kinds raised by the services and translated at the HTTP boundary.

Domain errors (4xx) carry a message that is safe to show to the user.
Storage errors (5xx) are fatal; their message is only logged.
"""

from fastapi import status


class WellnessError(Exception):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(WellnessError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = 'Authentication required'


class Forbidden(WellnessError):
    http_status = status.HTTP_403_FORBIDDEN
    default_message = 'Access denied'


class NotFound(WellnessError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class InvalidInput(WellnessError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid input'


class AlreadyMember(InvalidInput):
    default_message = 'Already a member'


class StorageError(WellnessError):
    pass


class StorageCorrupt(StorageError):
    default_message = 'Stored document could not be parsed'


class StorageUnavailable(StorageError):
    default_message = 'Storage unavailable'
