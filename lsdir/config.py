"""Configuration for lsdir.

Every LSDIR_* variable is read here.  load_dotenv() runs at import time
so a .env file in or above the working directory feeds the class attrs below.

Supported variables:
  LSDIR_DEFAULT_PATH     directory listed when no PATH argument is given
  LSDIR_LOG_LEVEL        log level name (DEBUG, INFO, WARNING, ...)
  LSDIR_MASK_WILDCARD    placeholder for masked-out timestamp components
  LSDIR_FOLLOW_SYMLINKS  stat symlink targets instead of the links themselves
"""

import os

from dotenv import find_dotenv, load_dotenv

# Existing environment variables win over .env entries
load_dotenv(find_dotenv(usecwd=True))

_ENV_VARS = (
    "LSDIR_DEFAULT_PATH",
    "LSDIR_LOG_LEVEL",
    "LSDIR_MASK_WILDCARD",
    "LSDIR_FOLLOW_SYMLINKS",
)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class LsdirConfig:
    # ------------------------------------------------------------ Listing
    DEFAULT_PATH = os.getenv("LSDIR_DEFAULT_PATH", ".")
    FOLLOW_SYMLINKS = _env_flag("LSDIR_FOLLOW_SYMLINKS")

    # ------------------------------------------------------------ Logging
    LOG_LEVEL = os.getenv("LSDIR_LOG_LEVEL", "WARNING").upper()

    # ------------------------------------------------------------ Grouping
    MASK_WILDCARD = os.getenv("LSDIR_MASK_WILDCARD", "*")

    @classmethod
    def describe(cls) -> list[tuple[str, str, str]]:
        """Return (setting, value, source) rows for --show-config."""
        values = {
            "LSDIR_DEFAULT_PATH": cls.DEFAULT_PATH,
            "LSDIR_LOG_LEVEL": cls.LOG_LEVEL,
            "LSDIR_MASK_WILDCARD": cls.MASK_WILDCARD,
            "LSDIR_FOLLOW_SYMLINKS": str(cls.FOLLOW_SYMLINKS).lower(),
        }
        return [
            (name, values[name], "environment" if name in os.environ else "default")
            for name in _ENV_VARS
        ]
