"""
Security utilities for the OGP image service.

Provides HTML escaping for text that is echoed into markup and the
URL builders for the pages this service fetches or redirects to.
"""
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched in addition to alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def escape_html(unsafe: str) -> str:
    """
    Escape HTML special characters.

    Args:
        unsafe: Text that may contain markup characters (None is treated as empty)

    Returns:
        Text with &, <, >, " and ' replaced by entities
    """
    if unsafe is None:
        return ""
    return (
        unsafe
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def encode_uri_component(value: str) -> str:
    """Percent-encode a single URL component (path segment or query value)."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_page_url(base_url: str, page: str) -> str:
    """URL of the page whose title is rendered; the page name is fully encoded."""
    return f"{base_url.rstrip('/')}/{encode_uri_component(page)}"


def build_redirect_url(base_url: str, page: str) -> str:
    """URL the share page sends readers to; the page name is kept as given."""
    return f"{base_url.rstrip('/')}/{page}"
