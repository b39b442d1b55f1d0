"""JSON response class rendered with orjson.

``ORJSONResponse`` is the default response class of both applications, so
the body bytes the response validator decodes are always orjson output.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    """FastAPI response class serializing content with orjson.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")

        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)


def decode_json_body(body: bytes) -> Any:  # noqa: ANN401 - any JSON value
    """Decode a rendered JSON body back into Python values.

    Args:
        body: Raw response bytes.

    Returns:
        Any: The decoded JSON value.

    Raises:
        orjson.JSONDecodeError: If the body is not valid JSON.
    """
    return orjson.loads(body)
