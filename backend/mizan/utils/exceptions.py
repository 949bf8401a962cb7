"""
Custom exception classes
"""
from fastapi import HTTPException


class MalformedDateError(ValueError):
    """Raised when a snapshot date is not a valid YYYY-MM-DD string"""
    def __init__(self, value):
        self.value = value
        super().__init__(f"Malformed date: {value!r}")


class CaseNotFoundError(HTTPException):
    """Raised when case isn't part of the submitted snapshot"""
    def __init__(self, case_id: str):
        super().__init__(
            status_code=404,
            detail=f"Case {case_id} not found"
        )
