"""Named failures raised by the marketplace and its SecretVault gateway."""


class MarketplaceError(Exception):
    """Base class for every known failure of the marketplace."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InitializationError(MarketplaceError):
    """Could not establish the SecretVault connection."""

    def __init__(self, message: str):
        super().__init__(f"Failed to initialize SecretVault: {message}")


class SchemaCreationError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Failed to create schema: {message}")


class DataWriteError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Failed to write data to SecretVault: {message}")


class DataReadError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Failed to read data from SecretVault: {message}")


class InvalidDataError(MarketplaceError):
    """Request data did not match its input schema."""

    def __init__(self, message: str):
        super().__init__(f"Invalid data provided: {message}")


class MissingSchemaError(MarketplaceError):
    """An action needs a remote schema id that has not been provisioned yet."""

    def __init__(self, schema_type: str):
        self.schema_type = schema_type
        super().__init__(
            f"Schema ID for {schema_type} is missing. Please create the schema first."
        )


class ConfigurationError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class BookingError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Booking error: {message}")


class FeedbackError(MarketplaceError):
    def __init__(self, message: str):
        super().__init__(f"Feedback error: {message}")
