"""HTTP session and bearer-token checks.

:class:`Session` is the single object every accessor talks to: it carries
the base URLs, the ``X-Client-*`` and ``Authorization`` headers, performs
GET/POST calls, and owns the in-memory cache store.
"""

from curvenote.session.session import Session, with_query
from curvenote.session.token import assert_token_will_work, decode_claims

__all__ = ["Session", "assert_token_will_work", "decode_claims", "with_query"]
