from __future__ import annotations

from .defaults import from_legacy_config
from .schema import Settings


def load_settings(*, ensure_dirs: bool = True, **overrides) -> Settings:
    """Load runtime settings, defaulting to values from the legacy config module.

    Keyword overrides whose value is None are ignored so CLI flags can be passed straight through.
    """
    settings = from_legacy_config()
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        settings = settings.with_overrides(**overrides)
    settings.validate()
    if ensure_dirs:
        settings.paths.ensure_dirs()
    return settings
