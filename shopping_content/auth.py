"""ClientLogin credential exchange."""

from __future__ import annotations

import logging
from typing import Dict

from .errors import AuthenticationError
from .transport import USER_AGENT

logger = logging.getLogger(__name__)

CLIENTLOGIN_URI = "https://www.google.com/accounts/ClientLogin"
CLIENTLOGIN_SERVICE = "structuredcontent"


def parse_tokens(body: str) -> Dict[str, str]:
    tokens: Dict[str, str] = {}
    for line in body.splitlines():
        line = line.strip()
        if not line or "=" not in line:
            continue
        key, value = line.split("=", 1)
        tokens[key] = value
    return tokens


def client_login(transport, email: str, password: str, login_uri: str = CLIENTLOGIN_URI) -> str:
    fields = {
        "Email": email,
        "Passwd": password,
        "service": CLIENTLOGIN_SERVICE,
        "source": USER_AGENT,
        "accountType": "GOOGLE",
    }
    response = transport.post_form(login_uri, fields)
    tokens = parse_tokens(response.body or "")
    token = tokens.get("Auth")
    if not token:
        reason = tokens.get("Error", f"HTTP {response.code}")
        raise AuthenticationError(f"Login failed for {email}: {reason}")
    logger.info("Logged in as %s", email)
    return token


def auth_header(token: str) -> str:
    return f"GoogleLogin auth={token}"
