class TinyGitError(Exception):
    """Base class for every failure raised by tiny_git."""


class ObjectNotFound(TinyGitError):
    pass


class CorruptObject(TinyGitError):
    pass


class MalformedObject(CorruptObject):
    """Canonical bytes that do not follow the object layout."""


class StoreWriteError(TinyGitError):
    pass


class BuildFailed(TinyGitError):
    pass


class InvalidArguments(TinyGitError):
    pass
