from fastapi import status


class ServiceError(Exception):
    """Base for conditions the API reports to the caller instead of failing."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details=None, status_code: int | None = None):
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateEmailError(ServiceError):
    def __init__(self, message: str = "Email already exists", status_code: int | None = None):
        super().__init__(message, status_code=status_code)


class DuplicateSerialError(ServiceError):
    def __init__(self, message: str = "Serial number already exists. Please use a unique serial number."):
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Invalid email or password")


class UploadRejectedError(ServiceError):
    pass
