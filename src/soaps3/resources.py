"""
Bucket and object handles for the soaps3 SDK
"""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from . import _xml
from .error import InvalidPolicyException, MalformedResponseException
from .models import Param, SoapResponse

ALL_USERS_URI = "http://acs.amazonaws.com/groups/global/AllUsers"
DEFAULT_CONTENT_TYPE = "text/plain"


@dataclass
class Bucket:
    """
    Handle for a bucket, identified by name.

    Creating a handle never contacts the service; every method below is
    one round trip through the owning client.
    """
    name: str
    client: Any = field(repr=False, compare=False)

    def delete(self) -> SoapResponse:
        """Delete the bucket. The service answers with a fault if it is not empty."""
        return self.client.invoke("DeleteBucket", Bucket=self.name)

    def list(self) -> List["S3Object"]:
        """List the objects in the bucket."""
        response = self.client.invoke("ListBucket", Bucket=self.name)
        objects = []
        for entry in response.find_all("Body/ListBucketResponse/ListBucketResponse/Contents"):
            key = _xml.find(entry, "Key")
            objects.append(self.object(_xml.simplify(key) if key is not None else ""))
        return objects

    def put_object(
        self,
        key: str,
        data: Union[bytes, str],
        options: Optional[Dict[str, str]] = None,
    ) -> Optional["S3Object"]:
        """
        Store ``data`` under ``key`` with PutObjectInline.

        ``options`` may carry a ``Content-Type`` (default text/plain).
        Returns None if the service reported a fault.
        """
        options = options or {}
        if isinstance(data, str):
            data = data.encode("utf-8")
        content_type = options.get("Content-Type") or DEFAULT_CONTENT_TYPE

        # ContentLength is the size of the raw data, not of its base64 form
        response = self.client.invoke(
            "PutObjectInline",
            Bucket=self.name,
            Key=key,
            Metadata=[("Name", "Content-Type"), ("Value", content_type)],
            Data=base64.b64encode(data).decode("ascii"),
            ContentLength=str(len(data)),
        )
        if response.fault is not None:
            return None
        return self.object(key)

    def object(self, key: str) -> "S3Object":
        """Handle for an existing object. Does not contact the service."""
        return S3Object(key=key, bucket=self, client=self.client)

    putobject = put_object


@dataclass
class S3Object:
    """Handle for an object, identified by bucket name and key."""
    key: str
    bucket: Bucket = field(repr=False)
    client: Any = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.key

    @property
    def bucket_name(self) -> str:
        return self.bucket.name

    def delete(self) -> SoapResponse:
        return self.client.invoke("DeleteObject", Bucket=self.bucket_name, Key=self.key)

    def acl(self, policy: Optional[str] = None) -> Union[str, SoapResponse]:
        """
        Get or set the object's access policy.

        Without an argument, returns "public" if any grant targets the
        AllUsers group, else "private". With "public" or "private"
        (any case), replaces the access control list accordingly.
        """
        if not policy:
            return self._get_acl()

        if not isinstance(policy, str):
            raise InvalidPolicyException(policy)

        if policy.lower() == "public":
            grants = [
                Param("Grant", [
                    Param("Grantee", [("URI", ALL_USERS_URI)], {"xsi:type": "Group"}),
                    ("Permission", "READ"),
                ]),
            ]
        elif policy.lower() == "private":
            grants = []
        else:
            raise InvalidPolicyException(policy)

        return self.client.invoke(
            "SetObjectAccessControlPolicy",
            Bucket=self.bucket_name,
            Key=self.key,
            AccessControlList=grants,
        )

    def _get_acl(self) -> str:
        response = self.client.invoke(
            "GetObjectAccessControlPolicy",
            Bucket=self.bucket_name,
            Key=self.key,
        )
        grants = response.find_all(
            "Body/GetObjectAccessControlPolicyResponse/GetObjectAccessControlPolicyResponse"
            "/AccessControlList/Grant"
        )
        for grant in grants:
            uri = _xml.find(grant, "Grantee/URI")
            if uri is not None and (uri.text or "").strip() == ALL_USERS_URI:
                return "public"
        return "private"

    def get_data(self) -> Optional[bytes]:
        """Fetch the object's data inline. Returns None on fault or when no data came back."""
        response = self.client.invoke(
            "GetObject",
            Bucket=self.bucket_name,
            Key=self.key,
            GetMetadata="false",
            GetData="true",
            InlineData="true",
        )
        if response.fault is not None:
            return None

        node = response.find("Body/GetObjectResponse/GetObjectResponse/Data")
        if node is None:
            return None
        try:
            return base64.b64decode(node.text or "")
        except binascii.Error as ex:
            raise MalformedResponseException(
                f"GetObject returned undecodable data for '{self.key}'. {str(ex)}",
                status_code=response.status_code,
            )

    getdata = get_data
