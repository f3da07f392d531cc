"""
SOAP request signer for the soaps3 SDK
"""

import base64
import hashlib
import hmac
from datetime import datetime, UTC
from typing import List, Optional

from .models import Param


class SoapRequestSigner:
    """
    Signs SOAP operations with the shared-secret HMAC-SHA1 scheme.

    The string to sign is ``"AmazonS3" + operation + timestamp``; nothing
    else of the request is covered.
    """
    
    SERVICE = "AmazonS3"
    
    def __init__(self, access_key_id: str, secret_access_key: str):
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
    
    @staticmethod
    def format_timestamp(timestamp: Optional[datetime] = None) -> str:
        """Format a UTC timestamp as ``YYYY-MM-DDTHH:MM:SS.000Z``."""
        if timestamp is None:
            timestamp = datetime.now(UTC)
        elif timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(UTC)
        # Milliseconds are always sent as zero
        return timestamp.strftime("%Y-%m-%dT%H:%M:%S") + ".000Z"
    
    def sign(self, operation: str, timestamp: str) -> str:
        """Return the base64 HMAC-SHA1 signature for an operation call."""
        canonical = f"{self.SERVICE}{operation}{timestamp}"
        digest = hmac.new(
            self.secret_access_key.encode(),
            canonical.encode(),
            hashlib.sha1
        ).digest()
        return base64.b64encode(digest).decode()
    
    def auth_params(self, operation: str, timestamp: Optional[datetime] = None) -> List[Param]:
        """
        Build the authentication parameters appended to every call.

        Order matters on the wire: access key id, timestamp, signature.
        """
        stamp = self.format_timestamp(timestamp)
        return [
            Param("AWSAccessKeyId", self.access_key_id),
            Param("Timestamp", stamp),
            Param("Signature", self.sign(operation, stamp)),
        ]
