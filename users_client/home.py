from typing import Dict, List, Optional
import httpx
from loguru import logger

from users_client.config import ClientConfig


class UserListView:
    """Home page: fetches every user once and shows one card per user."""

    def __init__(self, config: ClientConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client
        self.users: List[Dict] = []
        self.loading = True
        self.error: Optional[str] = None
        self._mounted = False

    @property
    def users_url(self) -> str:
        return f"{self.config.api_url}/users"

    async def mount(self):
        """Load the users. Only the first call fetches; failures end up in ``error``."""
        if self._mounted:
            return
        self._mounted = True
        try:
            response = await self._get()
            if not response.is_success:
                raise RuntimeError(f"HTTP error! status: {response.status_code}")
            users = response.json()
            if not isinstance(users, list) or not all(isinstance(user, dict) for user in users):
                raise RuntimeError("Unexpected response body: expected a list of users")
            self.users = users
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError, ValueError) as e:
            self.error = str(e)
            logger.error(f"Error fetching users: {self.error}")
        finally:
            self.loading = False

    async def _get(self) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.get(self.users_url)
        async with httpx.AsyncClient() as client:
            return await client.get(self.users_url)

    def render(self) -> List[str]:
        if self.loading:
            return ["Loading users..."]
        if self.error:
            return [f"Error: {self.error}"]
        return ["Users"] + [f"Email: {user.get('email', '')}" for user in self.users]
