"""Exceptions raised by statement builders and result mappers."""


class ConfigurationError(ValueError):
    """Builder is missing state required to prepare its statement."""


class MappingError(RuntimeError):
    """A result row could not be mapped to the target object."""
