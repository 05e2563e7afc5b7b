"""The HTTP session shared by every accessor in a process.

:class:`Session` owns the connection context for the Curvenote API -- base
URLs, client headers, the optional bearer token -- and performs the raw
GET/POST calls.  It also owns the :class:`~curvenote.store.CacheStore`
that accessors read from and dispatch into.

Nothing at this layer is cached or retried: each :meth:`Session.get` and
:meth:`Session.post` is exactly one request, and non-2xx responses are
returned to the caller rather than raised.
"""

from __future__ import annotations

import json
from typing import Any, Optional
from urllib.parse import quote, urlencode

import httpx

from curvenote import __version__
from curvenote.exceptions import ConnectionError_
from curvenote.models import DEFAULT_API_URL, DEFAULT_SITE_URL, SessionOptions, SessionResponse
from curvenote.output import OutputManager, get_output
from curvenote.session.token import assert_token_will_work
from curvenote.store import CacheStore

CLIENT_NAME = "python"


def with_query(url: str, query: Optional[dict[str, Any]] = None) -> str:
    """Append URL-encoded *query* parameters to *url*.

    Uses ``?`` or ``&`` depending on whether *url* already has a query
    string.  Returns *url* unchanged when there is nothing to append.
    """
    if not query:
        return url
    params = urlencode({k: str(v) for k, v in query.items()}, quote_via=quote)
    return f"{url}&{params}" if "?" in url else f"{url}?{params}"


def _parse_body(response: httpx.Response) -> Any:
    """Decode the response body as JSON, falling back to text, or ``None`` if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Session:
    """Connection configuration, raw HTTP calls, and the shared cache store.

    Args:
        token: Optional API bearer token.  It is decoded (not verified)
            up front so that malformed and expired tokens fail fast.
        options: Optional base URL overrides.
        log: Output manager used for warnings and debug lines.  Defaults to
            the process-wide manager from :func:`~curvenote.output.get_output`.
        transport: Optional :mod:`httpx` transport, e.g. a
            :class:`httpx.MockTransport` in tests.

    Raises:
        TokenInvalidError: If *token* cannot be decoded.
        TokenExpiredError: If *token* has already expired.

    Example::

        session = Session(token, SessionOptions(api_url="https://api.example.com"))
        resp = session.get("/my/user")
        if resp.status == 200:
            print(resp.body["username"])
    """

    def __init__(
        self,
        token: Optional[str] = None,
        options: Optional[SessionOptions] = None,
        *,
        log: Optional[OutputManager] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._log = log
        self.headers: dict[str, str] = {
            "X-Client-Name": CLIENT_NAME,
            "X-Client-Version": __version__,
        }
        if token:
            assert_token_will_work(token, self.log)
            self.headers["Authorization"] = f"Bearer {token}"

        options = options or SessionOptions()
        self.api_url = (options.api_url or DEFAULT_API_URL).rstrip("/")
        self.site_url = (options.site_url or DEFAULT_SITE_URL).rstrip("/")
        self.store = CacheStore()
        # No timeout: a hung request blocks the caller.
        self._client = httpx.Client(timeout=None, transport=transport)

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def is_anonymous(self) -> bool:
        """``True`` when the session carries no Authorization header."""
        return "Authorization" not in self.headers

    @property
    def log(self) -> OutputManager:
        if self._log is None:
            return get_output()
        return self._log

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def get(self, url: str, query: Optional[dict[str, Any]] = None) -> SessionResponse:
        """Send a GET request.

        Args:
            url: A path relative to :attr:`api_url`, or an absolute URL.
            query: Optional query parameters, URL-encoded and appended.

        Returns:
            The status code and parsed body.  Non-2xx responses are
            returned, not raised.
        """
        full_url = with_query(self._resolve(url), query)
        return self._send("GET", full_url)

    def post(self, url: str, data: Any) -> SessionResponse:
        """Send a POST request with *data* as the JSON body.

        A leading :attr:`api_url` on *url* is stripped and re-applied, so
        both ``"/things"`` and ``f"{api_url}/things"`` post to the same URL.
        """
        if url.startswith(self.api_url):
            url = url[len(self.api_url):]
        return self._send("POST", f"{self.api_url}{url}", json_body=data)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _resolve(self, url: str) -> str:
        if url.startswith(self.api_url) or url.startswith(("http://", "https://")):
            return url
        return f"{self.api_url}{url}"

    def _send(self, method: str, url: str, json_body: Any = None) -> SessionResponse:
        headers = {"Content-Type": "application/json", **self.headers}
        kwargs: dict[str, Any] = {"headers": headers}
        if json_body is not None:
            kwargs["content"] = json.dumps(json_body, separators=(",", ":"))
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"{method} {url} failed: {exc}") from exc
        return SessionResponse(status=response.status_code, body=_parse_body(response))
