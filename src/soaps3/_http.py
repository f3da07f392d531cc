"""
HTTP transport for the soaps3 SDK
"""

import httpx
from typing import Optional, Dict


class HttpClient:
    """
    HTTP client wrapper sending SOAP envelopes to a single endpoint.

    Requests are sent once; transport failures surface as httpx errors.
    """
    
    def __init__(
        self,
        endpoint: str,
        timeout: int = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            headers={"Accept": "text/xml"},
            transport=transport,
        )
        self.last_request: Optional[httpx.Request] = None
        self.last_response: Optional[httpx.Response] = None
    
    def post(
        self,
        content: bytes,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """POST a request body to the endpoint and return the raw response."""
        request = self._client.build_request(
            "POST",
            self.endpoint,
            content=content,
            headers=headers,
        )
        self.last_request = request
        response = self._client.send(request)
        self.last_response = response
        return response
    
    def close(self):
        """Close the HTTP client."""
        self._client.close()
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def format_request(request: httpx.Request) -> str:
    """Render a request the way it goes over the wire, for debug output."""
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    lines.append("")
    lines.append(request.content.decode("utf-8", errors="replace"))
    return "\n".join(lines)


def format_headers(response: httpx.Response) -> str:
    status = f"HTTP/1.1 {response.status_code} {response.reason_phrase}"
    return "\n".join([status] + [f"{name}: {value}" for name, value in response.headers.items()])
