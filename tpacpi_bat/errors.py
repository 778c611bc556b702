class TpacpiBatError(Exception):
    """Base class for every error that ends a tpacpi-bat invocation."""


class UsageError(TpacpiBatError):
    """Unrecognized method or mode, missing or extra positional arguments."""


class ValidationError(TpacpiBatError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class UnsupportedFeatureError(TpacpiBatError):
    """The firmware status word says the requested feature is not there."""


class NamespaceResolutionError(TpacpiBatError):
    """No ASL base could be determined, or the firmware did not find it."""


class CallFailureError(TpacpiBatError):
    def __init__(self, response: str) -> None:
        self.response = response
        super().__init__(f"ACPI call failed, response: {response!r}")


class StatusParseError(TpacpiBatError):
    def __init__(self, response: str, diagnostic: str | None = None) -> None:
        self.response = response
        self.diagnostic = diagnostic
        message = f"could not parse ACPI call response {response!r}"
        if diagnostic:
            message += f" ({diagnostic})"
        super().__init__(message)


class AcpiCallIOError(TpacpiBatError, OSError):
    """Reading from or writing to the call interface failed."""


class AcpiCallUnavailableError(AcpiCallIOError):
    """The call interface file is missing and could not be brought up."""
