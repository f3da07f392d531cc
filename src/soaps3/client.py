"""
S3Client - SOAP client for S3-style object storage
"""

import functools
import logging
import pprint
import xml.etree.ElementTree as ET
from typing import Optional, Iterable, List

import httpx

from . import _xml
from ._envelope import build_envelope
from ._http import HttpClient, format_headers, format_request
from ._signer import SoapRequestSigner
from .error import MalformedResponseException, S3FaultException
from .models import Fault, ParamLike, SoapResponse
from .resources import Bucket

DEFAULT_ENDPOINT = "https://s3.amazonaws.com/soap"


class S3Client:
    """
    SOAP client for S3-style object storage.

    Example:
        s3 = S3Client(access_key_id, secret_access_key, debug=True, raise_error=True)

        for bucket in s3.list_buckets():
            print(bucket.name)

        bucket = s3.create_bucket("mybucketname")
        obj = bucket.put_object("hello.txt", b"hello", {"Content-Type": "text/plain"})
        obj.acl("public")

        # Any other operation is available by name
        s3.GetBucketLoggingStatus(Bucket="mybucketname")
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        debug: bool = False,
        raise_error: bool = False,
        endpoint: str = DEFAULT_ENDPOINT,
        request_timeout: int = 30,
        http_client: Optional[HttpClient] = None,
    ):
        """
        Initialize S3Client.

        Args:
            access_key_id: Access key id sent with every request
            secret_access_key: Shared secret used to sign requests
            debug: Print every request and response on stdout
            raise_error: Raise S3FaultException when the service returns a Fault;
                otherwise the fault is only recorded in ``error``
            endpoint: SOAP endpoint URL
            request_timeout: Request timeout in seconds
            http_client: Transport to use instead of a new HttpClient
        """
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.debug = debug
        self.raise_error = raise_error
        self.endpoint = endpoint
        self.error: Optional[Fault] = None

        self._http = http_client or HttpClient(endpoint, timeout=request_timeout)
        self._signer = SoapRequestSigner(access_key_id, secret_access_key)
        self._logger = logging.getLogger(__name__)

    def __getattr__(self, name: str):
        # Only reached for names not found normally; private and dunder
        # names (copy, pickle, __del__ lookups) must not become operations.
        if name.startswith("_"):
            raise AttributeError(name)
        return functools.partial(self.invoke, name)

    def invoke(
        self,
        operation: str,
        params: Optional[Iterable[ParamLike]] = None,
        **kwargs,
    ) -> SoapResponse:
        """
        Call a SOAP operation by name.

        Positional ``params`` come first, then keyword arguments in call
        order, then the authentication parameters. The returned response
        carries the fault, if any; ``error`` is overwritten either way.
        """
        request_params: List[ParamLike] = list(params or [])
        request_params.extend(kwargs.items())
        request_params.extend(self._signer.auth_params(operation))

        envelope = build_envelope(operation, request_params)
        self._logger.debug("[SoapS3][Invoke] operation=%s endpoint=%s", operation, self.endpoint)

        response = self._http.post(
            envelope.encode("utf-8"),
            headers={"Content-Type": "text/xml; charset=utf-8", "SOAPAction": '""'},
        )

        if self.debug:
            self._print_exchange(response)

        return self._unwrap(operation, response)

    def _print_exchange(self, response: httpx.Response) -> None:
        print(format_request(self._http.last_request))
        print("\n\n")
        print(format_headers(response))
        print()
        print(_xml.tidy(response.text))
        print()

    def _unwrap(self, operation: str, response: httpx.Response) -> SoapResponse:
        try:
            document = ET.fromstring(response.content)
        except ET.ParseError as ex:
            raise MalformedResponseException(
                f"Response to {operation} is not valid XML. {str(ex)}",
                status_code=response.status_code,
            )

        fault_node = _xml.find(document, "Body/Fault")
        fault = Fault.from_element(fault_node) if fault_node is not None else None
        self.error = fault

        if fault is not None:
            self._logger.warning(
                "[SoapS3][Fault] operation=%s code=%s message=%s",
                operation,
                fault.code,
                fault.message,
            )
            if self.raise_error:
                print("\nAmazon returned Fault:")
                pprint.pprint(fault.to_dict())
                raise S3FaultException(fault, status_code=response.status_code)

        return SoapResponse(
            operation=operation,
            content=response.text,
            document=document,
            status_code=response.status_code,
            headers=dict(response.headers),
            fault=fault,
        )

    # Bucket operations

    def list_buckets(self) -> List[Bucket]:
        """List all buckets owned by the account, in the order returned."""
        response = self.invoke("ListAllMyBuckets")
        entries = response.find_all(
            "Body/ListAllMyBucketsResponse/ListAllMyBucketsResponse/Buckets/Bucket"
        )
        buckets = []
        for entry in entries:
            name = _xml.find(entry, "Name")
            buckets.append(Bucket(client=self, name=_xml.simplify(name) if name is not None else ""))
        return buckets

    def create_bucket(self, name: str) -> Optional[Bucket]:
        """Create a bucket; returns None if the service reported a fault."""
        response = self.invoke("CreateBucket", Bucket=name)
        if response.fault is not None:
            return None
        return Bucket(client=self, name=name)

    def bucket(self, name: str) -> Bucket:
        """Handle for an existing bucket. Does not contact the service."""
        return Bucket(client=self, name=name)

    # Unseparated spellings of the same calls
    listbuckets = list_buckets
    createbucket = create_bucket

    def close(self) -> None:
        """Close the client and cleanup resources."""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
