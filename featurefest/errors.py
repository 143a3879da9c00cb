"""Errors raised by the Featurefest client."""


class FeaturefestError(Exception):
    """Base class for every error the SDK raises."""

    default_message = "Featurefest request failed."
    recovery_suggestion = "Please try again later."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidAPIKeyError(FeaturefestError):
    default_message = "Invalid API key. Please check your board ID."
    recovery_suggestion = "Verify that your board ID is correct and that the board exists."


class InvalidResponseError(FeaturefestError):
    default_message = "Invalid response from server."


class HTTPStatusError(FeaturefestError):
    """Non-2xx response whose body carried no usable error message."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP error with status code: {status_code}")


class APIError(FeaturefestError):
    """Non-2xx response with a structured ``{"message": ...}`` body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(f"API error: {message}")


class NetworkError(FeaturefestError):
    default_message = "Network error occurred."
    recovery_suggestion = "Check your internet connection and try again."


class DecodingError(FeaturefestError):
    default_message = "Failed to decode response."


class UserAlreadyVotedError(FeaturefestError):
    default_message = "User has already voted on this feature."
    recovery_suggestion = "Users can only vote once per feature. You can change your vote."


class FeatureNotFoundError(FeaturefestError):
    default_message = "Feature not found."


class BoardNotFoundError(FeaturefestError):
    default_message = "Board not found."


class InvalidRequestError(FeaturefestError):
    default_message = "Invalid request. Only upvotes are supported."


__all__ = [
    "FeaturefestError",
    "InvalidAPIKeyError",
    "InvalidResponseError",
    "HTTPStatusError",
    "APIError",
    "NetworkError",
    "DecodingError",
    "UserAlreadyVotedError",
    "FeatureNotFoundError",
    "BoardNotFoundError",
    "InvalidRequestError",
]
