from __future__ import annotations

__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """Invalid options, or an input/name file that cannot be used.

    Raised before any search or rendering starts so callers can abort without
    producing partial output.
    """
