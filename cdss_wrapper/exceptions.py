"""
Exceptions raised by the CDSS client.
"""


class CdssError(Exception):
    """Base exception for CDSS API errors"""
    pass


class CdssValidationError(CdssError, ValueError):
    """Raised when caller input is malformed or unsupported"""
    pass


class CdssAPIError(CdssError):
    """Raised when the API answers with a non-success status"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API request failed with status {status_code}: {message}")


class CdssConnectionError(CdssError):
    """Raised when the API cannot be reached"""
    pass
