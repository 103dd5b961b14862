"""
pass-craft - Error Kinds

Every failure the tool can report is a PassCraftError subclass. Each one
carries a short `kind` tag so messages read like "MissingField: site".
"""

from typing import Optional


class PassCraftError(Exception):
    """Base class for all pass-craft failures."""

    kind = "PassCraftError"

    def __init__(self, detail: str, line_no: Optional[int] = None, line: Optional[str] = None):
        self.detail = detail
        self.line_no = line_no
        self.line = line
        super().__init__(detail)

    def at_line(self, line_no: int, line: str) -> "PassCraftError":
        """Attach file position to an error raised while parsing one line."""
        self.line_no = line_no
        self.line = line
        return self

    def __str__(self) -> str:
        msg = f"{self.kind}: {self.detail}"
        if self.line_no is not None:
            msg += f" (line {self.line_no}: {self.line})"
        return msg


class MissingFieldError(PassCraftError):
    kind = "MissingField"


class UnsupportedAlgorithmError(PassCraftError):
    kind = "UnsupportedAlgorithm"


class InvalidNumericValueError(PassCraftError):
    kind = "InvalidNumericValue"


class CutExceedsDigestLengthError(PassCraftError):
    kind = "CutExceedsDigestLength"


class UpperStartExceedsCutError(PassCraftError):
    kind = "UpperStartExceedsCut"


class EndExceedsCutError(PassCraftError):
    kind = "EndExceedsCut"


class ConfigFileNotFoundError(PassCraftError):
    kind = "FileNotFound"


class FileWriteFailureError(PassCraftError):
    kind = "FileWriteFailure"


class MalformedLineError(PassCraftError):
    kind = "MalformedLine"


class FileReadFailureError(PassCraftError):
    kind = "FileReadFailure"
