"""Link rewriting - Pure functions.

Rewrites Twitter/X links to Nitter and Medium links to Scribe, keeping
the original link alongside as a Markdown source link.
"""

import re
from urllib.parse import urlsplit, urlunsplit


# https://www.regextester.com/94502
URL_REGEX = re.compile(
    r"https?://[\w.-]+(?:\.[\w.-]+)+[\w\-._~:/?#\[\]@!$&'()*+,;=]+"
)

NITTER_HOST = "nitter.net"
SCRIBE_HOST = "scribe.rip"


def _is_twitter(host: str) -> bool:
    return host == "x.com" or host.endswith("twitter.com")


def _is_medium(host: str) -> bool:
    return host.endswith("medium.com")


DEFAULT_PORTS = {"http": 80, "https": 443}


def _with_host(url: str, host: str, keep_query: bool = True) -> str:
    parts = urlsplit(url)
    netloc = host
    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(parts.scheme.lower()):
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    query = parts.query if keep_query else ""
    return urlunsplit((parts.scheme, netloc, parts.path or "/", query, parts.fragment))


def rewrite_url(url: str) -> str:
    """Rewrite a single URL if it points at a known site.

    Pure function.

    Args:
        url: URL as found in the text

    Returns:
        "<rewritten> ([source](<url>))", or url unchanged
    """
    try:
        host = urlsplit(url).hostname or ""
        if _is_twitter(host):
            # Nitter doesn't like Twitter's tracking params, so drop the query
            rewritten = _with_host(url, NITTER_HOST, keep_query=False)
        elif _is_medium(host):
            rewritten = _with_host(url, SCRIBE_HOST)
        else:
            return url
    except ValueError:
        # Unparseable port or similar
        return url

    return f"{rewritten} ([source]({url}))"


def substitute_urls(text: str) -> str:
    """Rewrite every known-site URL in text.

    Pure function.
    """
    return URL_REGEX.sub(lambda match: rewrite_url(match.group(0)), text)
