"""Route class that runs response validation before a response is sent.

Routers opt in with ``APIRouter(route_class=ValidatedRoute)``. The schemas
come from the ``responses`` declared on each route::

    @router.get("/pets", responses={200: {"model": PetCollection}})

They are compiled once per route into pydantic ``TypeAdapter`` objects. The
handler still returns plain data, so FastAPI does not validate it first.
"""

from collections.abc import Callable, Coroutine, Mapping
from typing import Any

from fastapi import Request, Response
from fastapi.routing import APIRoute
from pydantic import TypeAdapter
from starlette.responses import StreamingResponse

from api_skeleton.api.constants import JSON_CONTENT_TYPES
from api_skeleton.api.middleware.error_handler import create_error_response
from api_skeleton.api.utils.responses import decode_json_body
from api_skeleton.api.validation.response_validator import (
    Replace,
    ResponseContext,
    ResponseValidator,
)
from api_skeleton.core.exceptions import Severity


def compile_response_schemas(
    responses: Mapping[int | str, dict[str, Any]],
) -> dict[int, TypeAdapter[Any]]:
    """Build a ``TypeAdapter`` per status code that declares a ``model``.

    Args:
        responses: The ``responses`` mapping of a route.

    Returns:
        dict[int, TypeAdapter[Any]]: Schemas keyed by numeric status code.
            Ranges such as ``"4XX"`` and ``"default"`` are not validated.
    """
    schemas: dict[int, TypeAdapter[Any]] = {}
    for status_code, declaration in responses.items():
        model = declaration.get("model")
        if model is None or not str(status_code).isdigit():
            continue
        schemas[int(status_code)] = TypeAdapter(model)
    return schemas


def _is_json(response: Response) -> bool:
    content_type = response.media_type or response.headers.get("content-type", "")
    return content_type.split(";")[0].strip() in JSON_CONTENT_TYPES


def intercept_response(
    request: Request,
    response: Response,
    schemas: Mapping[int, TypeAdapter[Any]],
) -> Response:
    """Apply the application's ``ResponseValidator`` to ``response``.

    Args:
        request: The request being answered.
        response: The response produced by the endpoint.
        schemas: Declared schemas of the route.

    Returns:
        Response: ``response`` itself, or the replacement error response in
            strict mode.
    """
    if isinstance(response, StreamingResponse) or not _is_json(response):
        return response

    schema = schemas.get(response.status_code)
    if schema is None or not response.body:
        return response

    context = ResponseContext(
        status_code=response.status_code,
        body=decode_json_body(response.body),
        schema=schema,
    )
    request.state.response_context = context

    validator: ResponseValidator = request.app.state.response_validator
    action = validator.before_send(context)
    if isinstance(action, Replace):
        return create_error_response(
            request,
            status_code=action.status_code,
            error_code=action.error_code,
            message=action.message,
            severity=Severity.HIGH.value,
            details=action.details,
        )
    return response


class ValidatedRoute(APIRoute):
    """``APIRoute`` whose responses pass through the response validator."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()
        schemas = compile_response_schemas(self.responses)

        async def validated_route_handler(request: Request) -> Response:
            response = await original_route_handler(request)
            return intercept_response(request, response, schemas)

        return validated_route_handler
