"""Exceptions raised inside the offload and clipboard layers."""


class ClipsegError(Exception):
    """Base class for clipseg errors."""


class OffloadTimeout(ClipsegError, TimeoutError):
    """The background worker did not answer within the timeout."""


class OffloadUnavailable(ClipsegError):
    """The background execution context could not be created or has died."""


class ClipboardSecurityError(ClipsegError):
    """The clipboard cannot be read from the current security context."""


class UnknownRuleError(ClipsegError, ValueError):
    """A split or remove rule name is not defined."""
