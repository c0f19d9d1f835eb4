from http import HTTPStatus


class HttpError(Exception):
    """Error carrying an HTTP status and a message meant for the caller."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {
            "statusCode": int(self.status_code),
            "message": self.message,
            "error": self.status_code.phrase,
        }


class ConflictError(HttpError):
    status_code = HTTPStatus.CONFLICT
