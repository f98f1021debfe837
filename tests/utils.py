import json

import requests

# NOTE: Default accounts/deployments of a local dev chain, all valid checksums.
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
OWNER_2 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
OWNER_3 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
SAFE = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
SAFE_2 = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"

API_KEY = "test-api-key"


def make_response(url: str, status_code: int, payload) -> requests.Response:
    response = requests.Response()
    response.url = url
    response.status_code = status_code
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response._content = json.dumps(payload).encode()
    return response


class FakeSession:
    """
    Stands in for ``requests.Session``. Each URL serves its queued responses
    in order, repeating the last one; unknown URLs get a 404.
    """

    def __init__(self):
        self.routes: dict[str, list] = {}
        self.calls: list[tuple[str, str, dict]] = []

    def add(self, url: str, *responses):
        """
        Queue responses for ``url``: a payload (served as a 200), a
        ``(status_code, payload)`` pair, or an exception to raise.
        """
        self.routes.setdefault(url, []).extend(responses)

    def urls_called(self) -> list[str]:
        return [url for _, url, _ in self.calls]

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        self.calls.append((method, url, kwargs))
        if not (queue := self.routes.get(url)):
            return make_response(url, 404, {"detail": "Not found."})

        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item

        elif isinstance(item, tuple):
            status_code, payload = item
            return make_response(url, status_code, payload)

        return make_response(url, 200, item)
