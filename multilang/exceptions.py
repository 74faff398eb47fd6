"""Domain-specific exceptions."""


class MultiLangError(Exception):
    pass


class InvalidArgument(MultiLangError, ValueError):
    pass


class StorageUnavailable(MultiLangError):
    pass


class ConfigurationInvalid(MultiLangError):
    pass


__all__ = ["MultiLangError", "InvalidArgument", "StorageUnavailable", "ConfigurationInvalid"]
