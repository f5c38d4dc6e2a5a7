"""
Error Types

The engine is total over its documented inputs: missing data is reported as
a result status, not raised. The exceptions here cover parsing at the edges
(stored records, disease names) and are handled before they reach callers.
"""


class FlareWatchError(Exception):
    """Base class for flarewatch errors."""


class MalformedRecordError(FlareWatchError):
    """A persisted record could not be parsed into its expected shape."""
    
    def __init__(self, kind: str, detail: str):
        self.kind = kind
        self.detail = detail
        super().__init__(f"Malformed {kind} record: {detail}")


class UnknownDiseaseError(FlareWatchError, ValueError):
    """A disease name did not match any supported condition."""


class UnknownRecordKindError(FlareWatchError, ValueError):
    """A record collection name is not known to the store."""
