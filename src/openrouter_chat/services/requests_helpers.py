from __future__ import annotations

import requests

from openrouter_chat.app.config import ChatSettings


def session_with_bearer(settings: ChatSettings) -> requests.Session:
    """
    Create a requests session configured for the OpenRouter API.

    The session is configured with:
    - Bearer token authorization header
    - Standard JSON content-type headers
    - OpenRouter attribution headers (HTTP-Referer, X-Title) when configured

    Args:
        settings: Client settings holding the API key and optional app details

    Returns:
        requests.Session: A configured requests session ready for API calls
    """
    session = requests.Session()

    session.headers.update({
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    if settings.app_url:
        session.headers["HTTP-Referer"] = settings.app_url
    if settings.app_title:
        session.headers["X-Title"] = settings.app_title
    return session
