class BlogError(Exception):
    """Base class for errors raised while serving blog content."""


class UpstreamUnavailable(BlogError):
    """The Notion API could not be reached or answered with an error."""


class MalformedDocument(BlogError):
    """A Notion property or page did not have the expected shape."""


class NotFound(BlogError):
    pass


class MissingConfiguration(BlogError):
    def __init__(self, name: str):
        super().__init__(f"Missing required configuration: {name}")
        self.name = name


class UnsupportedSortKind(BlogError):
    def __init__(self, value: str):
        super().__init__(f"Unsupported sort kind: {value!r}")
        self.value = value
