from typing import TYPE_CHECKING, Any, Optional

from ape.exceptions import ApeException

if TYPE_CHECKING:
    from requests import Response


class SafeLookupException(ApeException):
    pass


class InvalidAddressError(SafeLookupException, ValueError):
    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"'{value}' is not a valid address.")


class ConfigurationError(SafeLookupException):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "SAFE_API_KEY is not set.")


class AddressBookError(SafeLookupException):
    pass


class ClientResponseError(SafeLookupException):
    def __init__(self, endpoint_url: str, response: "Response", message: Optional[str] = None):
        self.endpoint_url = endpoint_url
        self.response = response
        message = message or (
            f"Exception when calling '{endpoint_url}' ({response.status_code}):\n{response.text}"
        )
        super().__init__(message)


class NotFoundError(ClientResponseError):
    """
    Raised on a 404 from the Safe Transaction Service. Callers treat this as
    "nothing on this network" rather than as a failure.
    """

    def __init__(self, endpoint_url: str, response: "Response"):
        super().__init__(endpoint_url, response, message=f"Nothing found at '{endpoint_url}'.")


class FetchExhaustedError(SafeLookupException):
    def __init__(self, url: str, attempts: int, last_error: Optional[BaseException]):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        reason = f": {last_error}" if last_error else "."
        super().__init__(f"Request to '{url}' failed after {attempts} attempt(s){reason}")
