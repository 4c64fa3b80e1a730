"""
Configuration for class graph construction and rendering.

Values can be set directly or read from the environment (a local .env
file is honoured via python-dotenv):

    CLASSGRAPH_ENABLE_EXTERNAL              include external types in listings
    CLASSGRAPH_IGNORE_ATTRIBUTE_VISIBILITY  non-public attributes were scanned
    CLASSGRAPH_IGNORE_ROUTINE_VISIBILITY    non-public routines were scanned
    CLASSGRAPH_ROOT_TYPE                    name of the universal base type
    CLASSGRAPH_VERBOSE                      print progress lines
"""

import os
from dataclasses import dataclass

import dotenv

dotenv.load_dotenv()


DEFAULT_ROOT_TYPE = "java.lang.Object"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class GraphConfig:
    """
    Scan-level settings shared by the index, the queries and the exporter.

    Attributes:
        enable_external_classes: When False (strict whitelist), records
            flagged as external are hidden from every listing and diagram.
        ignore_attribute_visibility: True when the scan included non-public
            attributes. Attribute rows then show their modifiers and the
            section header drops the "PUBLIC " prefix. A public-only scan
            (False) renders rows without modifiers.
        ignore_routine_visibility: Same as above, for routines.
        root_type_name: The universal base type, never listed or drawn.
        verbose: Print progress lines while building and rendering.
    """
    enable_external_classes: bool = False
    ignore_attribute_visibility: bool = False
    ignore_routine_visibility: bool = False
    root_type_name: str = DEFAULT_ROOT_TYPE
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "GraphConfig":
        """Build a config from CLASSGRAPH_* environment variables."""
        return cls(
            enable_external_classes=_env_flag("CLASSGRAPH_ENABLE_EXTERNAL", False),
            ignore_attribute_visibility=_env_flag("CLASSGRAPH_IGNORE_ATTRIBUTE_VISIBILITY", False),
            ignore_routine_visibility=_env_flag("CLASSGRAPH_IGNORE_ROUTINE_VISIBILITY", False),
            root_type_name=os.getenv("CLASSGRAPH_ROOT_TYPE", DEFAULT_ROOT_TYPE) or DEFAULT_ROOT_TYPE,
            verbose=_env_flag("CLASSGRAPH_VERBOSE", False),
        )
