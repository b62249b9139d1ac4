from typing import Callable
from fastapi import HTTPException, Request, Response, status
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

ALLOW_METHODS = "GET, POST"
# Content-Type plus the headers htmx adds to every request
ALLOW_HEADERS = "Content-Type, hx-target, hx-current-url, hx-request"


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }


class CORSRoute(APIRoute):
    """
    Route class that adds permissive CORS headers to every response of the route.
    OPTIONS requests are answered with 204 before the endpoint (or its dependencies) run.
    """

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def cors_route_handler(request: Request) -> Response:
            headers = cors_headers(getattr(request.app.state, "cors_allow_origin", "*"))
            if request.method == "OPTIONS":
                return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)

            try:
                response = await original_route_handler(request)
            except StarletteHTTPException as e:
                # Error responses are built by the exception handlers, so the headers travel on the exception
                raise HTTPException(
                    status_code=e.status_code,
                    detail=e.detail,
                    headers={**(e.headers or {}), **headers},
                ) from e

            response.headers.update(headers)
            return response

        return cors_route_handler
