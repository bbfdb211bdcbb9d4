"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and a
project User-Agent. Requests are not retried: a failing provider call raises
and aborts the run. All datasource modules should use this instead of bare
``requests.get``.

Usage::

    from occurrence_pipeline.services.http import session

    resp = session.get("https://api.gbif.org/v1/occurrence/search", timeout=30)
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "occurrence-pipeline/0.1"


def create_session(timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """
    Build a ``requests.Session`` with a plain adapter mounted.

    Args:
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    # Session.request always forwards ``timeout=None`` when the caller gave none.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, imported directly by datasources.
session: requests.Session = create_session()
