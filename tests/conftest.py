"""Shared fixtures: a scripted lengthen service behind httpx.MockTransport."""

import httpx
import pytest

from lengthen_cli.client import HttpClient
from lengthen_cli.controller import RequestController
from lengthen_cli.form import TerminalForm
from lengthen_cli.utils import Config

ORIGIN = "https://short.example"


class FakeService:
    """Records every request and answers with whatever ``reply`` returns."""

    def __init__(self):
        self.requests = []
        self.reply = lambda request: httpx.Response(200, text="abc123")

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.reply(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def cfg():
    return Config(url=ORIGIN + "/index.html")


@pytest.fixture
def http(cfg, service):
    return HttpClient(cfg, transport=service.transport)


@pytest.fixture
def form():
    return TerminalForm(render=False)


@pytest.fixture
def controller(http, form):
    return RequestController(http, form)
