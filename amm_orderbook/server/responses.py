"""JSON response helpers for the HTTP handlers."""

from aiohttp import web

from ..api.types import ErrorBody


def ok_response(data: dict, max_age: int = 0) -> web.Response:
    """200 with a shared-cache hint of ``max_age`` seconds."""
    return web.json_response(
        data,
        headers={"Cache-Control": f"max-age=0, s-maxage={max_age}"},
    )


def bad_request_response(message: str = "Bad request") -> web.Response:
    return web.json_response(ErrorBody(400, message).to_dict(), status=400)


def server_error_response(error: Exception) -> web.Response:
    return web.json_response(ErrorBody(500, str(error)).to_dict(), status=500)
