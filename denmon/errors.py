"""Base exceptions shared by every denmon stage."""

from __future__ import annotations


class DenmonError(Exception):
    """Base class for all denmon failures.

    The command line catches this single type, renders the cause chain and
    exits non-zero.
    """


class ConfigError(DenmonError):
    """Raised when environment configuration is invalid."""

    @classmethod
    def invalid_float(cls, env_var: str, raw: str) -> ConfigError:
        """Return an error for a variable that must hold a float."""
        return cls(f"{env_var} must be a number, got: {raw!r}")

    @classmethod
    def not_positive(cls, env_var: str, value: float) -> ConfigError:
        """Return an error for a variable that must be strictly positive."""
        return cls(f"{env_var} must be positive, got: {value}")

    @classmethod
    def empty(cls, name: str) -> ConfigError:
        """Return an error for a required value that is blank."""
        return cls(f"{name} must be non-empty")


def render_error_chain(exc: BaseException) -> str:
    """Join ``exc`` and its ``__cause__`` chain into one operator-facing line.

    Examples
    --------
    >>> try:
    ...     try:
    ...         raise ValueError("bad digit")
    ...     except ValueError as inner:
    ...         raise DenmonError("invalid supply") from inner
    ... except DenmonError as outer:
    ...     render_error_chain(outer)
    'invalid supply: bad digit'

    """
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
