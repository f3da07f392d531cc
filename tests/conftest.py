import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from soaps3 import S3Client
from soaps3._http import HttpClient
from soaps3._xml import local_name, simplify


ENDPOINT = "https://s3.example.test/soap"
ACCESS_KEY = "AKIATESAFEKEY0000001"
SECRET_KEY = "wJalrXUtnFEMIaKkMDENGbPxRfIcxAmPlEkEyZaB"

SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"
S3_NS = "http://s3.amazonaws.com/doc/2006-03-01/"


class SoapResponses:
    """Builders for the response envelopes the fake service sends back."""

    ENDPOINT = ENDPOINT
    ACCESS_KEY = ACCESS_KEY
    SECRET_KEY = SECRET_KEY

    @staticmethod
    def envelope(body: str) -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            f'<soapenv:Envelope xmlns:soapenv="{SOAP_NS}">'
            f"<soapenv:Body>{body}</soapenv:Body>"
            "</soapenv:Envelope>"
        )

    @classmethod
    def operation(cls, operation: str, inner: str = "") -> str:
        return cls.envelope(
            f'<{operation}Response xmlns="{S3_NS}">'
            f"<{operation}Response>{inner}</{operation}Response>"
            f"</{operation}Response>"
        )

    @classmethod
    def fault(
        cls,
        code: str = "Client.NoSuchBucket",
        message: str = "The specified bucket does not exist",
        extra: str = "",
    ) -> str:
        return cls.envelope(
            "<soapenv:Fault>"
            f"<faultcode>{code}</faultcode>"
            f"<faultstring>{message}</faultstring>"
            f"{extra}"
            "</soapenv:Fault>"
        )


@dataclass
class RecordedCall:
    """One request as seen by the fake service."""
    operation: str
    element: ET.Element
    request: httpx.Request
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def param_names(self) -> List[str]:
        return [local_name(child.tag) for child in self.element]


Responder = Union[str, tuple, Callable[[RecordedCall], Union[str, tuple]]]


class FakeS3Service:
    """
    In-memory stand-in for the SOAP endpoint, served through httpx.MockTransport.

    PutObjectInline and GetObject keep object data; every other operation
    answers with an empty success body unless a response is registered.
    """

    def __init__(self):
        self.calls: List[RecordedCall] = []
        self.responses: Dict[str, Responder] = {}
        self.objects: Dict[tuple, str] = {}

    def respond(self, operation: str, body: Responder) -> None:
        self.responses[operation] = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        document = ET.fromstring(request.content)
        body = next(child for child in document if local_name(child.tag) == "Body")
        element = body[0]
        call = RecordedCall(
            operation=local_name(element.tag),
            element=element,
            request=request,
            params=simplify(element),
        )
        self.calls.append(call)

        if call.operation in self.responses:
            result = self.responses[call.operation]
            if callable(result):
                result = result(call)
        else:
            result = self._default(call)

        status, text = result if isinstance(result, tuple) else (200, result)
        return httpx.Response(status, text=text, headers={"Content-Type": "text/xml; charset=utf-8"})

    def _default(self, call: RecordedCall):
        params = call.params
        if call.operation == "PutObjectInline":
            self.objects[(params["Bucket"], params["Key"])] = params["Data"]
            return SoapResponses.operation(call.operation, "<ETag>&quot;abc&quot;</ETag>")
        if call.operation == "GetObject":
            data = self.objects.get((params["Bucket"], params["Key"]))
            if data is None:
                return 500, SoapResponses.fault("Client.NoSuchKey", "The specified key does not exist.")
            return SoapResponses.operation(call.operation, f"<Data>{data}</Data>")
        return SoapResponses.operation(call.operation)


@pytest.fixture
def soap():
    return SoapResponses


@pytest.fixture
def service() -> FakeS3Service:
    return FakeS3Service()


@pytest.fixture
def make_client(service):
    def _make(**kwargs) -> S3Client:
        http = HttpClient(ENDPOINT, transport=httpx.MockTransport(service))
        return S3Client(ACCESS_KEY, SECRET_KEY, http_client=http, endpoint=ENDPOINT, **kwargs)
    return _make


@pytest.fixture
def client(make_client) -> S3Client:
    return make_client()
