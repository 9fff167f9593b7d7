class FDLError(Exception): ...


class IngestError(FDLError): ...


class TransformError(FDLError): ...


class ConfigError(FDLError): ...


def require(condition: bool, message: str, exc: type[FDLError] = FDLError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
