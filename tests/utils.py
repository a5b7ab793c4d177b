"""Helpers shared across the test-suite."""

from __future__ import annotations

import re

_CSRF_RE = re.compile(r'name="csrf_token"[^>]*value="([^"]+)"')


def login(client, email: str, password: str):
    """Log ``email`` in through the login form and follow the redirect.

    The CSRF token is forwarded when the login page renders one, so the
    helper also works with CSRF protection switched on.
    """

    page = client.get("/login")
    form_data = {"email": email, "password": password}
    match = _CSRF_RE.search(page.get_data(as_text=True))
    if match:
        form_data["csrf_token"] = match.group(1)
    return client.post("/login", data=form_data, follow_redirects=True)
