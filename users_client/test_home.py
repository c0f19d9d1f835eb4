"""
Unit tests for the user list page.
"""
import asyncio

import httpx

from users_client.config import ClientConfig
from users_client.home import UserListView

CONFIG = ClientConfig(api_url="http://api.test")


def make_view(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return UserListView(CONFIG, http_client=client)


class TestUserListView:

    def test_loading_before_mount(self):
        view = make_view(lambda request: httpx.Response(200, json=[]))
        assert view.loading is True
        assert view.render() == ["Loading users..."]

    def test_renders_one_card_per_user(self):
        users = [{"id": 1, "email": "a@b.com"}, {"id": 2, "email": "c@d.com"}]
        view = make_view(lambda request: httpx.Response(200, json=users))
        asyncio.run(view.mount())
        assert view.loading is False
        assert view.users == users
        assert view.render() == ["Users", "Email: a@b.com", "Email: c@d.com"]

    def test_requests_users_endpoint(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=[])

        view = make_view(handler)
        asyncio.run(view.mount())
        assert seen == ["http://api.test/users"]

    def test_fetches_once(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        view = make_view(handler)
        asyncio.run(view.mount())
        asyncio.run(view.mount())
        assert len(calls) == 1

    def test_http_error_status(self):
        view = make_view(lambda request: httpx.Response(500, json={"message": "boom"}))
        asyncio.run(view.mount())
        assert view.loading is False
        assert view.error == "HTTP error! status: 500"
        assert view.render() == ["Error: HTTP error! status: 500"]

    def test_network_error_rendered_not_raised(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        view = make_view(handler)
        asyncio.run(view.mount())
        assert view.loading is False
        assert view.error == "connection refused"
        assert view.render()[0].startswith("Error:")

    def test_bad_json_rendered_as_error(self):
        view = make_view(lambda request: httpx.Response(200, content=b"not json"))
        asyncio.run(view.mount())
        assert view.error
        assert view.users == []

    def test_object_body_rendered_as_error(self):
        view = make_view(lambda request: httpx.Response(200, json={"message": "x"}))
        asyncio.run(view.mount())
        assert view.loading is False
        assert view.error == "Unexpected response body: expected a list of users"
        assert view.users == []
        assert view.render() == ["Error: Unexpected response body: expected a list of users"]

    def test_non_object_items_rendered_as_error(self):
        view = make_view(lambda request: httpx.Response(200, json=["a@b.com"]))
        asyncio.run(view.mount())
        assert view.error == "Unexpected response body: expected a list of users"
        assert view.render()[0].startswith("Error:")

    def test_user_without_email_renders(self):
        view = make_view(lambda request: httpx.Response(200, json=[{"id": 1}]))
        asyncio.run(view.mount())
        assert view.error is None
        assert view.render() == ["Users", "Email: "]
