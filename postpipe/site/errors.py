"""Runtime error types."""


class PostPipeError(Exception):
    """Base class for postpipe errors"""


class LoadError(PostPipeError):
    """Fetching a resource from the content root failed"""


class IndexLoadError(LoadError):
    """The serialized post index could not be loaded"""


class DocumentLoadError(LoadError):
    """A single post document could not be loaded"""

    def __init__(self, file: str, reason: str, status: int | None = None):
        self.file = file
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to load post '{file}': {reason}")


class MissingParameterError(PostPipeError):
    """The page URL does not name a post file"""

    def __init__(self, parameter: str = "file"):
        self.parameter = parameter
        super().__init__(f"No post file specified ('{parameter}' parameter missing)")
