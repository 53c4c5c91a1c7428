"""
Custom exceptions for the forensic-dna profile database.

Lookups that miss and scans over an empty tree are ordinary results, not
errors; these types cover bad input and policy violations only.
"""


class ForensicDNAError(Exception):
    """Base exception for forensic-dna errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(ForensicDNAError):
    """Raised when input validation fails."""
    pass


class FileFormatError(ValidationError):
    """Raised when a profile database file is malformed."""
    pass


class ConfigurationError(ForensicDNAError):
    """Raised when configuration is invalid."""
    pass


class DuplicateProfileError(ForensicDNAError):
    """Raised when a name is inserted twice under the reject policy."""
    pass
