"""Mock auth tokens for local development.

Tokens look like ``dev.<claims>.<signature>`` where both parts are unpadded
base64url. The signature is random bytes; nothing verifies it.
"""

from __future__ import annotations

import base64
import getpass
import json
import secrets
import time

from devtools_cli.exceptions import ActionError
from devtools_cli.menu.model import Menu, MenuBuilder
from devtools_cli.modules.base import ActionContext, ActionSpec

SIGNATURE_BYTES = 24


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def build_token(claims: dict[str, str]) -> str:
    claims = {**claims, "iat": str(int(time.time()))}
    payload = _b64url(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signature = _b64url(secrets.token_bytes(SIGNATURE_BYTES))
    return f"dev.{payload}.{signature}"


def create_userpass_token(username: str, password: str) -> str:
    if not password:
        raise ActionError("password cannot be empty", "userpass-token")
    return build_token({"method": "password", "username": username})


def create_google_token(email: str) -> str:
    if not email:
        raise ActionError("email cannot be empty", "google-token")
    return build_token({"method": "google", "email": email})


def _prompt(label: str, *, secret: bool = False) -> str:
    try:
        value = getpass.getpass(label) if secret else input(label)
    except (EOFError, KeyboardInterrupt):
        raise ActionError("input cancelled")
    return value.strip()


def prompt_userpass_token() -> str:
    username = _prompt("Username: ")
    password = _prompt("Password: ", secret=True)
    return create_userpass_token(username, password)


def prompt_google_token() -> str:
    return create_google_token(_prompt("Google email: "))


def userpass_token(context: ActionContext) -> str:
    username = context.param_or_positional("username", 0)
    password = context.param_or_positional("password", 1)
    if not username:
        raise ActionError(
            "missing username (use --username or first positional argument)", "userpass-token"
        )
    if not password:
        raise ActionError(
            "missing password (use --password or second positional argument)", "userpass-token"
        )
    return create_userpass_token(username, password)


def google_token(context: ActionContext) -> str:
    email = context.param_or_positional("email", 0)
    if not email:
        raise ActionError("missing email (use --email or first positional argument)", "google-token")
    return create_google_token(email)


class AuthTokenTool:
    tool_id = "auth-token-generator"
    label = "Auth Token Generator"
    description = "Generate mock auth tokens for local development"

    def requirements(self):
        return ()

    def actions(self):
        return (
            ActionSpec(
                action_id="userpass-token",
                label="Generate username/password token",
                description="Generate token for username and password flow",
                usage=(
                    "devtools run auth-token-generator userpass-token "
                    "--username <name> --password <secret>"
                ),
                run=userpass_token,
            ),
            ActionSpec(
                action_id="google-token",
                label="Generate Google token",
                description="Generate token for Google OAuth flow",
                usage="devtools run auth-token-generator google-token --email <user@example.com>",
                run=google_token,
            ),
        )

    def menu(self) -> Menu:
        userpass = (
            MenuBuilder("Auth Token / Username + Password")
            .action("Generate token", "Prompt for username and password", prompt_userpass_token)
            .with_back()
            .build()
        )
        google = (
            MenuBuilder("Auth Token / Google")
            .action("Generate token", "Prompt for Google email identity", prompt_google_token)
            .with_back()
            .build()
        )
        return (
            MenuBuilder("Auth Token Generator")
            .submenu("Username + Password", "Token for classic credential flow", userpass)
            .submenu("Google", "Token for Google OAuth flow", google)
            .with_back()
            .build()
        )
