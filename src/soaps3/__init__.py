"""
soaps3 - SOAP client for S3-style object storage
"""

__version__ = "0.1.0"

from .client import S3Client
from .resources import Bucket, S3Object
from .models import (
    Param,
    Fault,
    SoapResponse,
)
from .error import (
    S3SoapException,
    S3FaultException,
    InvalidPolicyException,
    MalformedResponseException,
)

__all__ = [
    "S3Client",
    "Bucket",
    "S3Object",
    "Param",
    "Fault",
    "SoapResponse",
    "S3SoapException",
    "S3FaultException",
    "InvalidPolicyException",
    "MalformedResponseException",
]
