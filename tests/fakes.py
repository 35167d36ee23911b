from __future__ import annotations

from pydantic import BaseModel

from routeclient import (
    JSON,
    PLAIN_TEXT,
    Capture,
    CaptureAll,
    Delete,
    Get,
    Header,
    Post,
    QueryParam,
    QueryParams,
    ReqBody,
    Request,
    Response,
    alternatives,
    path,
)


class Widget(BaseModel):
    id: int
    name: str


class NewWidget(BaseModel):
    name: str


class FakeTransport:
    """Records every request and answers with a canned response or error."""

    def __init__(self, response: Response | None = None, error: Exception | None = None) -> None:
        self.requests: list[Request] = []
        self.response = response or Response(status=200, headers={"content-type": "application/json"}, body=b"null")
        self.error = error

    async def execute(self, request: Request) -> Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def json_response(body: bytes, status: int = 200) -> Response:
    return Response(status=status, headers={"content-type": "application/json"}, body=body)


def widget_api():
    return alternatives(
        widgets=path(
            "widgets",
            alternatives(
                list=QueryParam("limit", QueryParams("tag", Get(list[Widget])), type=int),
                get=Capture("id", Get(Widget), type=int),
                create=Header("X-Request-Id", ReqBody(JSON, Post(Widget), type=NewWidget)),
                delete=Capture("id", Delete(Widget), type=int),
            ),
        ),
        files=path("files", CaptureAll("path", Get(str, PLAIN_TEXT))),
        health=path("health", Get(str, PLAIN_TEXT)),
    )
