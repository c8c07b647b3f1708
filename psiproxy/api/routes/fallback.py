"""Catch-all route for every path other than /psi."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

HELLO_WORLD = "Hello World\n"


@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def hello_world(path: str) -> PlainTextResponse:
    return PlainTextResponse(HELLO_WORLD)
