from typing import List, Optional
import httpx

from users_client.config import ClientConfig
from users_client.home import UserListView
from users_client.register_form import RegisterForm

# Header links of the root layout; "/login" has no page behind it
NAV_LINKS = [
    ("IA03 - User RegisterForm", "/"),
    ("SignIn", "/login"),
    ("Register", "/register"),
]


class PageNotFound(LookupError):
    def __init__(self, path: str):
        super().__init__(f"No page for {path}")
        self.path = path


class Navigator:
    """Client-side location with its history of visited paths."""

    def __init__(self, location: str = "/"):
        self.location = location
        self.history: List[str] = [location]

    def navigate(self, path: str):
        self.location = path
        self.history.append(path)


def create_page(path: str, config: ClientConfig, navigator: Navigator,
                http_client: Optional[httpx.AsyncClient] = None):
    """Build the view mounted at ``path``."""
    if path == "/":
        return UserListView(config, http_client=http_client)
    if path == "/register":
        return RegisterForm(config, http_client=http_client, navigate=navigator.navigate)
    raise PageNotFound(path)
