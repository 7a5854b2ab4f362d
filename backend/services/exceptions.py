"""Error taxonomy shared by the services and mapped to HTTP statuses in main."""


class DocChatError(Exception):
    """Base class for errors reported to the client as `{"error": message}`."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DocChatError):
    """Bad or missing input: blank question, non-text file, unknown selection."""

    status_code = 400


class DocumentNotFoundError(DocChatError):
    """No document with the requested id."""

    status_code = 404


class UpstreamError(DocChatError):
    """The LLM provider call failed."""

    status_code = 500


class StorageError(DocChatError):
    """Reading or writing the document snapshot or uploads failed."""

    status_code = 500
