from typing import Callable, Dict, Optional
import httpx
from loguru import logger

from users_client.config import ClientConfig
from users_client.validation import validate_field, validate_form

REGISTRATION_FAILED = "Registration failed"
UNEXPECTED_ERROR = "An unexpected error occurred"


class RegisterForm:
    """Sign-up form: email and password, validated locally, posted to the API.

    ``http_client`` is used for every request when given; otherwise each
    submission opens its own ``httpx.AsyncClient``. ``navigate`` receives the
    path to move to once the server accepts the registration.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.config = config
        self.http_client = http_client
        self.navigate = navigate or (lambda path: None)
        self.values: Dict[str, str] = {"email": "", "password": ""}
        self.errors: Dict[str, Optional[str]] = {}
        self.api_error = ""

    @property
    def register_url(self) -> str:
        return f"{self.config.api_url}/users/register"

    def on_field_change(self, field_name: str, value: str):
        self.values[field_name] = value
        if field_name in ("email", "password"):
            self.errors[field_name] = validate_field(field_name, value)

    def has_errors(self) -> bool:
        return any(self.errors.values())

    async def on_submit(self) -> bool:
        """Validate and post the form. Returns True once the user is registered."""
        self.errors = dict(validate_form(self.values))
        if self.has_errors():
            logger.info(f"Registration blocked by validation: {sorted(self.errors)}")
            return False

        try:
            response = await self._post(self.values)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.api_error = UNEXPECTED_ERROR
            logger.error(f"Error during registration: {str(e)}")
            return False

        if response.is_success:
            self.api_error = ""
            logger.info("Registration successful!")
            self.navigate("/")
            return True

        self.api_error = self._error_message(response)
        logger.warning(f"Registration rejected with status {response.status_code}: {self.api_error}")
        return False

    async def _post(self, body: Dict[str, str]) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(self.register_url, json=body)
        async with httpx.AsyncClient() as client:
            return await client.post(self.register_url, json=body)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return REGISTRATION_FAILED
        message = data.get("message") if isinstance(data, dict) else None
        # Payload validation failures carry one message per field
        if isinstance(message, list):
            message = ", ".join(str(m) for m in message)
        elif message and not isinstance(message, str):
            message = str(message)
        return message or REGISTRATION_FAILED
