"""Runtime configuration for stashd.

Settings come from the environment first and ~/.stashd/config.yaml second:
- PAGER: Pager command; set but empty disables paging
- STASHD_COLOR: auto, always or never
- STASHD_DEBUG: Enable debug logging (1, true, yes, on)
"""

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from stashd.global_config import GlobalConfigError, load_global_config


TRUTHY_VALUES = ("1", "true", "yes", "on")


class ColorMode(Enum):
    """When to ask git for colored output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class StashdConfig(BaseModel):
    """Resolved settings for one run.

    Attributes:
        pager: Shell command to page output through, or None for stdout.
        color: Whether to force git's color output.
        debug: Whether to log debug messages to stderr.
    """

    pager: Optional[str] = None
    color: ColorMode = ColorMode.AUTO
    debug: bool = False

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, v):
        """Accept color names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


def load_config(environ: Optional[Mapping[str, str]] = None) -> StashdConfig:
    """Resolve the configuration from the environment and the config file.

    Args:
        environ: Environment mapping; defaults to os.environ.

    Returns:
        The resolved StashdConfig.

    Raises:
        GlobalConfigError: If the config file or a setting is invalid.
    """
    if environ is None:
        environ = os.environ

    values = dict(load_global_config())

    if "PAGER" in environ:
        values["pager"] = environ["PAGER"]
    if environ.get("STASHD_COLOR"):
        values["color"] = environ["STASHD_COLOR"]
    if environ.get("STASHD_DEBUG"):
        values["debug"] = environ["STASHD_DEBUG"].strip().lower() in TRUTHY_VALUES

    # An empty pager means "no pager", same as unset
    if not values.get("pager"):
        values["pager"] = None

    try:
        return StashdConfig(**values)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid configuration: {e}")


def should_use_color(config: StashdConfig, stdout_is_tty: bool, term: Optional[str]) -> bool:
    """Decide whether git should be asked for colored output.

    In auto mode color is used only when stdout is a terminal and TERM is
    set to something other than "dumb".

    Args:
        config: The resolved configuration.
        stdout_is_tty: Whether standard output is a terminal.
        term: Value of $TERM, or None if unset.

    Returns:
        True if --color=always should be passed to git.
    """
    if config.color is ColorMode.ALWAYS:
        return True
    if config.color is ColorMode.NEVER:
        return False
    return stdout_is_tty and bool(term) and term != "dumb"
