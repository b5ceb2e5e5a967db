from __future__ import annotations

import os

_DEFAULT_FAMILY_NAME = "القفاري"
_DEFAULT_CONNECTOR_MALE = "بن"
_DEFAULT_CONNECTOR_FEMALE = "بنت"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_str(name: str, default: str) -> str:
    value = (os.environ.get(name) or "").strip()
    return value or default


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def get_family_name() -> str:
    return _env_str("NASAB_FAMILY_NAME", _DEFAULT_FAMILY_NAME)


def get_connectors() -> dict[str, str]:
    """Return the lineage connector word per gender ("son of" / "daughter of")."""
    return {
        "male": _env_str("NASAB_CONNECTOR_MALE", _DEFAULT_CONNECTOR_MALE),
        "female": _env_str("NASAB_CONNECTOR_FEMALE", _DEFAULT_CONNECTOR_FEMALE),
    }


def get_name_include_self() -> bool:
    """Whether full lineage names start with the person's own name.

    The profile sheet omits it (the name is already the sheet title); admin
    screens include it.
    """
    return _env_bool("NASAB_NAME_INCLUDE_SELF", True)
