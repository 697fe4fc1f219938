"""Route upstream requests through an optional pass-through proxy."""


def apply_proxy(url: str, proxy_url: str | None) -> str:
    """
    Wrap ``url`` in the configured proxy, if any.

    Query-style proxies (``https://corsproxy.io/?``) take the target URL
    appended verbatim; path-style proxies take it as a path segment.
    """
    if not proxy_url:
        return url

    if "?" in proxy_url or "corsproxy.io" in proxy_url:
        return f"{proxy_url}{url}"

    return f"{proxy_url.rstrip('/')}/{url}"
