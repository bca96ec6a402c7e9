"""Roblox session cookie lookup.

The asset delivery API only serves private and most public assets to an
authenticated session. The cookie is taken from the ROBLOSECURITY environment
variable, or from the credential Roblox Studio stores after the user logs in.
"""

from __future__ import annotations

import logging
import plistlib
import re
from pathlib import Path

from drillbit.utils.platform import get_env, get_home_directory, get_os

logger = logging.getLogger(__name__)

COOKIE_ENV = "ROBLOSECURITY"
COOKIE_NAME = ".ROBLOSECURITY"

WINDOWS_REGISTRY_KEY = r"Software\Roblox\RobloxStudioBrowser\roblox.com"
MACOS_PLIST = "Library/Preferences/com.roblox.RobloxStudioBrowser.plist"

# Studio stores values as "SEC::<YES>,EXP::<...>,COOK::<value>"
_STORED_COOKIE = re.compile(r"COOK::<([^>]*)>")


class AuthError(Exception):
    """Error obtaining a Roblox session credential."""


def unpack_stored_value(value: str) -> str:
    """Extract the cookie from a value stored by Roblox Studio.

    Plain cookie values are returned unchanged.
    """
    match = _STORED_COOKIE.search(value)
    if match:
        return match.group(1)
    return value.strip()


def _read_windows_registry() -> str | None:
    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, WINDOWS_REGISTRY_KEY) as key:
            value, _type = winreg.QueryValueEx(key, COOKIE_NAME)
    except OSError:
        logger.debug("No Studio cookie in registry key %s", WINDOWS_REGISTRY_KEY)
        return None
    return str(value)


def _read_macos_plist() -> str | None:
    plist_path = Path(get_home_directory()) / MACOS_PLIST
    if not plist_path.exists():
        logger.debug("Studio preferences not found at %s", plist_path)
        return None

    try:
        with open(plist_path, "rb") as f:
            data = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException) as e:
        raise AuthError(f"Cannot read Studio preferences {plist_path}: {e}") from e

    entry = data.get("roblox.com")
    if isinstance(entry, dict):
        value = entry.get(COOKIE_NAME)
        if isinstance(value, str):
            return value
    return None


def read_stored_cookie() -> str | None:
    """Read the cookie Roblox Studio stored for the logged-in user, if any."""
    current_os = get_os()
    if current_os == "windows":
        return _read_windows_registry()
    if current_os == "macos":
        return _read_macos_plist()
    return None


def get_cookie() -> str:
    """Get a Cookie header value for the current Roblox session.

    Returns:
        Header value of the form ".ROBLOSECURITY=<cookie>"

    Raises:
        AuthError: If no session cookie can be found
    """
    value = get_env(COOKIE_ENV)
    if value:
        logger.debug("Using Roblox cookie from %s", COOKIE_ENV)
    else:
        value = read_stored_cookie()

    if not value:
        raise AuthError(
            f"Couldn't get Roblox cookie. Log in to Roblox Studio or set {COOKIE_ENV}."
        )

    cookie = unpack_stored_value(value)
    if not cookie:
        raise AuthError("Stored Roblox cookie is empty")

    return f"{COOKIE_NAME}={cookie}"
