"""OGP image service: dynamic Open Graph cards and share redirects for wiki pages."""

__version__ = "1.0.0"
