"""Runtime configuration for failure reports."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerdictSettings(BaseSettings):
    """Configuration for how failure reports are rendered.

    Environment variables are read with the ``VERDICT_`` prefix.

    Attributes
    ----------
    include_tracebacks
        Append the formatted traceback to every "first exception" fact
        (from ``VERDICT_INCLUDE_TRACEBACKS``).
    qualified_type_names
        Annotate ambiguous values with module-qualified type names
        (``decimal.Decimal`` instead of ``Decimal``). Builtins are never
        qualified.
    """

    include_tracebacks: bool = Field(default=True)
    qualified_type_names: bool = Field(default=False)

    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="VERDICT_",
    )


_default_settings: VerdictSettings | None = None


def get_settings() -> VerdictSettings:
    """Return the process-wide settings loaded from the environment (lazy init)."""

    global _default_settings
    if _default_settings is None:
        _default_settings = VerdictSettings()
    return _default_settings


def reset_settings() -> None:
    """Drop the cached settings so the next ``get_settings`` re-reads the environment."""

    global _default_settings
    _default_settings = None
