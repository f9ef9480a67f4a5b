__all__ = ("CacheHeadersError", "ArgumentError")


class CacheHeadersError(Exception): ...


class ArgumentError(CacheHeadersError): ...
