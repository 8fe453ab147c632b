"""HTTP helpers shared by the exchange and the converter API client"""

from typing import Optional

import httpx


def server_message(response: httpx.Response, field: str = "message") -> Optional[str]:
    """Extract a displayable message from an error response body, if any

    Args:
        response: The failed response
        field: Body field carrying the message ("message" or "error")

    Returns:
        The message, or None when the body has no usable text in ``field``
    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get(field)
        if isinstance(message, str) and message.strip():
            return message
    return None
