from functools import cached_property
from typing import TYPE_CHECKING, Optional, TypeVar

import backoff
import requests
from ape.logging import logger
from pydantic import BaseModel
from requests.adapters import HTTPAdapter

from ape_safe_lookup.exceptions import ClientResponseError, FetchExhaustedError, NotFoundError

if TYPE_CHECKING:
    from requests import Response

DEFAULT_HEADERS = {
    "Accept": "application/json",
}
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 0.5  # seconds
DEFAULT_TIMEOUT = 10  # seconds

ModelT = TypeVar("ModelT", bound=BaseModel)


def create_session() -> requests.Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=10,  # One pool per network gateway
        pool_maxsize=100,  # Number of concurrent connections
        pool_block=False,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class BaseClient:
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

        if session is not None:
            # NOTE: Overrides the cached property so clients can share one pool.
            self.session = session

    """Request methods"""

    @cached_property
    def session(self) -> requests.Session:
        return create_session()

    @property
    def headers(self) -> dict[str, str]:
        if not self.api_key:
            return {**DEFAULT_HEADERS}

        return {**DEFAULT_HEADERS, "Authorization": f"Bearer {self.api_key}"}

    def api_url(self, url: str, api_version: str = "v1") -> str:
        # NOTE: paged requests include full url already
        if url.startswith(("http://", "https://")):
            return url

        return f"{self.base_url}/api/{api_version}{url}"

    def _get(self, url: str, params: Optional[dict] = None, **kwargs) -> "Response":
        return self._request("GET", url, params=params, **kwargs)

    def _request(self, method: str, url: str, **kwargs) -> "Response":
        api_url = self.api_url(url, api_version=kwargs.pop("api_version", "v1"))

        # Use `or` to handle when None is explicit.
        kwargs["timeout"] = kwargs.get("timeout") or self.timeout

        headers = kwargs.get("headers", {})
        kwargs["headers"] = {**self.headers, **headers}
        response = self.session.request(method, api_url, **kwargs)

        if response.status_code == 404:
            raise NotFoundError(api_url, response)

        elif not response.ok:
            raise ClientResponseError(api_url, response)

        return response

    def get_with_retry(
        self, url: str, max_retries: Optional[int] = None, **kwargs
    ) -> "Response":
        """
        GET ``url``, retrying with a fixed delay on anything other than a 404.

        Raises:
            :class:`~ape_safe_lookup.exceptions.NotFoundError`: Immediately, on a 404.
            :class:`~ape_safe_lookup.exceptions.FetchExhaustedError`: Once every
              attempt has failed.
        """
        attempts = self.max_retries if max_retries is None else max_retries
        if attempts < 1:
            raise ValueError("max_retries must be at least 1.")

        def log_attempt(details: dict):
            logger.debug(
                f"Attempt {details['tries']}/{attempts} for '{url}' failed: "
                f"{details['exception']}"
            )

        get = backoff.on_exception(
            backoff.constant,
            (ClientResponseError, requests.RequestException),
            max_tries=attempts,
            interval=self.retry_delay,
            jitter=None,
            giveup=lambda err: isinstance(err, NotFoundError),
            on_backoff=log_attempt,
            logger=None,
        )(self._get)

        try:
            return get(url, **kwargs)

        except NotFoundError:
            raise

        except (ClientResponseError, requests.RequestException) as err:
            raise FetchExhaustedError(url, attempts, err) from err

    def fetch(
        self, url: str, model: type[ModelT], max_retries: Optional[int] = None, **kwargs
    ) -> ModelT:
        response = self.get_with_retry(url, max_retries=max_retries, **kwargs)
        return model.model_validate(response.json())
