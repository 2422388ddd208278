"""Resolution of logical entities across live backend, durable cache and mock data."""
from .errors import AuthRequired, LiveSourceError
from .pipeline import LiveFetch, Resolver, is_empty
from .provenance import Resolution, Source

__all__ = ["AuthRequired", "LiveSourceError", "LiveFetch", "Resolution", "Resolver", "Source", "is_empty"]
