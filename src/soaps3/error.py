"""
Exception classes for the soaps3 SDK
"""

from .models import Fault


class S3SoapException(Exception):
    """
    Base exception for all soaps3 SDK errors.
    """
    
    def __init__(self, message: str, status_code: int = None, error_code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class S3FaultException(S3SoapException):
    """Thrown when the service answers with a SOAP Fault and raise_error is on."""
    
    def __init__(self, fault: Fault, status_code: int = None):
        super().__init__(
            f"Amazon returned Fault: {fault.code}: {fault.message}",
            status_code=status_code,
            error_code=fault.code,
        )
        self.fault = fault


class InvalidPolicyException(S3SoapException, ValueError):
    """Thrown when an unsupported ACL policy is requested."""
    
    def __init__(self, policy: str):
        super().__init__(
            f"Invalid policy: '{policy}' - valid policies are 'public' and 'private'"
        )
        self.policy = policy


class MalformedResponseException(S3SoapException):
    """Thrown when the response body is not a parsable XML document."""
    
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message, status_code=status_code)
