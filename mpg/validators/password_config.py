"""
Validation of the password attributes of the MySQL database user block.

A user password is either passed as ``password`` (stored in state) or as the
write-only ``password_wo`` together with a ``password_wo_version`` that tells
Terraform when the write-only value changed.
"""

import logging
from collections.abc import Mapping
from typing import Any

from mpg.core.diagnostics import Diagnostics

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "Asserts that the password is not set when using password_wo and that "
    "password_wo_version is set when using password_wo."
)


def description() -> str:
    """Plain text description of the checks, shown in provider documentation."""
    return DESCRIPTION


def markdown_description() -> str:
    return DESCRIPTION


def validate_password_config(config: Mapping[str, Any]) -> Diagnostics:
    """
    Validate the password attributes of a MySQL user configuration.

    Args:
        config: User block attributes; missing keys and None values count as unset

    Returns:
        Diagnostics with a warning when both password and password_wo are set, and
        an error when password_wo is set without password_wo_version
    """
    diagnostics = Diagnostics()

    has_password = config.get("password") is not None
    has_write_only_password = config.get("password_wo") is not None
    has_password_version = config.get("password_wo_version") is not None

    if has_password and has_write_only_password:
        logger.debug("Both password and password_wo are configured, password_wo takes precedence")
        diagnostics.add_attribute_warning(
            "password_wo",
            "duplicate password",
            "password and password_wo are mutually exclusive; will prefer password_wo",
        )

    if has_write_only_password and not has_password_version:
        diagnostics.add_attribute_error(
            "password_wo_version",
            "missing password_wo_version",
            "password_wo_version is required when using password_wo",
        )

    return diagnostics
