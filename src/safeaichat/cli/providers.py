"""Provider factory functions for CLI.

Centralizes creation of the model and safety settings from environment
variables. Hides configuration details from command implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..llm import OnDeviceModel, create_model
from ..safety import SafetyLevel, SafetySettings

# Default console for output
_console = Console()

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

# SafetySettings field -> environment variable
SAFETY_FLAG_ENV = {
    "block_harassment": "SAFEAICHAT_BLOCK_HARASSMENT",
    "block_hate_speech": "SAFEAICHAT_BLOCK_HATE_SPEECH",
    "block_sexual_content": "SAFEAICHAT_BLOCK_SEXUAL_CONTENT",
    "block_dangerous_content": "SAFEAICHAT_BLOCK_DANGEROUS_CONTENT",
}


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value.

    Raises:
        ValueError: If the value is not a recognized boolean
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def model_config_from_env() -> dict[str, Any]:
    """Read model pacing configuration.

    Environment variables:
        SAFEAICHAT_PROCESSING_DELAY: Seconds after Processing (default: 0.3)
        SAFEAICHAT_CHUNK_DELAY: Seconds between chunks (default: 0.05)
    """
    return {
        "processing_delay": _env_float("SAFEAICHAT_PROCESSING_DELAY", 0.3),
        "chunk_delay": _env_float("SAFEAICHAT_CHUNK_DELAY", 0.05),
    }


def get_model(console: Console | None = None) -> OnDeviceModel:
    """Create the on-device model from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Model instance, not yet initialized

    Raises:
        SystemExit: If the configuration is invalid

    Environment variables:
        SAFEAICHAT_MODEL: Model backend (default: simulated)
        SAFEAICHAT_PROCESSING_DELAY, SAFEAICHAT_CHUNK_DELAY: see model_config_from_env
    """
    import typer

    con = console or _console
    backend = os.getenv("SAFEAICHAT_MODEL", "simulated")
    try:
        return create_model(backend, **model_config_from_env())
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def safety_settings_from_env() -> SafetySettings:
    """Read safety settings, defaulting every field to the strictest value.

    Environment variables:
        SAFEAICHAT_SAFETY_LEVEL: strict, moderate or permissive (default: strict)
        SAFEAICHAT_BLOCK_HARASSMENT, SAFEAICHAT_BLOCK_HATE_SPEECH,
        SAFEAICHAT_BLOCK_SEXUAL_CONTENT, SAFEAICHAT_BLOCK_DANGEROUS_CONTENT:
            booleans (default: true)

    Raises:
        ValueError: If a value cannot be parsed
    """
    raw_level = os.getenv("SAFEAICHAT_SAFETY_LEVEL", SafetyLevel.STRICT.value)
    try:
        level = SafetyLevel(raw_level.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown safety level: {raw_level}. "
            f"Supported levels: {', '.join(lvl.value for lvl in SafetyLevel)}"
        ) from None

    flags = {}
    for field, env_name in SAFETY_FLAG_ENV.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            try:
                flags[field] = parse_bool(raw)
            except ValueError as e:
                raise ValueError(f"{env_name}: {e}") from None

    return SafetySettings(level=level, **flags)


def get_safety_settings(
    level: SafetyLevel | None = None,
    allow_harassment: bool = False,
    allow_hate_speech: bool = False,
    allow_sexual_content: bool = False,
    allow_dangerous_content: bool = False,
    console: Console | None = None,
) -> SafetySettings:
    """Combine environment settings with command-line overrides.

    Each allow_* flag turns the matching block off.

    Raises:
        SystemExit: If the environment configuration is invalid
    """
    import typer

    con = console or _console
    try:
        settings = safety_settings_from_env()
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    overrides: dict[str, Any] = {}
    if level is not None:
        overrides["level"] = level
    if allow_harassment:
        overrides["block_harassment"] = False
    if allow_hate_speech:
        overrides["block_hate_speech"] = False
    if allow_sexual_content:
        overrides["block_sexual_content"] = False
    if allow_dangerous_content:
        overrides["block_dangerous_content"] = False

    return settings.model_copy(update=overrides) if overrides else settings
