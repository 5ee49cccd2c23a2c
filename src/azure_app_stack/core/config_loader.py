"""
Configuration loading utilities.

Reads the stack configuration (Pulumi.<stack>.yaml) through ``pulumi.Config``
and builds a validated StackConfig.

Keys Read (project namespace):
    sqlAdmin   - SQL server administrator login (default: "pulumi")
    mode       - "DEBUG" or "PRODUCTION" (default: "PRODUCTION")
    namePrefix - Prefix for logical resource names (default: "")

Usage:
    from azure_app_stack.core.config_loader import load_stack_config

    config = load_stack_config()
    print(config.sql_admin)  # "pulumi" unless configured
"""

import logging
from typing import Optional

import pulumi

from azure_app_stack import constants as CONSTANTS
from .context import StackConfig
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def validate_sql_admin(username: str) -> str:
    """
    Validate an Azure SQL administrator login.

    Args:
        username: The login to validate

    Returns:
        The login, unchanged

    Raises:
        ConfigurationError: If the login is blank, contains whitespace,
            or is reserved by Azure SQL
    """
    if not username or not username.strip():
        raise ConfigurationError(
            "Invalid value for 'sqlAdmin': login must not be empty",
            config_key=CONSTANTS.CONFIG_SQL_ADMIN
        )

    if any(ch.isspace() for ch in username):
        raise ConfigurationError(
            f"Invalid value for 'sqlAdmin': '{username}' contains whitespace",
            config_key=CONSTANTS.CONFIG_SQL_ADMIN
        )

    if username.lower() in CONSTANTS.SQL_RESERVED_LOGINS:
        raise ConfigurationError(
            f"Invalid value for 'sqlAdmin': '{username}' is a reserved login",
            config_key=CONSTANTS.CONFIG_SQL_ADMIN
        )

    return username


def load_stack_config(config: Optional[pulumi.Config] = None) -> StackConfig:
    """
    Load the stack configuration.

    Absent values fall back to their defaults; the SQL administrator login
    is validated after the fallback is applied.

    Args:
        config: Config accessor to read from. Defaults to the project's
            ``pulumi.Config()``.

    Returns:
        StackConfig with all loaded settings

    Raises:
        ConfigurationError: If sqlAdmin is invalid
    """
    if config is None:
        config = pulumi.Config()

    sql_admin = config.get(CONSTANTS.CONFIG_SQL_ADMIN)
    if sql_admin is None:
        logger.debug(f"'{CONSTANTS.CONFIG_SQL_ADMIN}' not set, using default '{CONSTANTS.DEFAULT_SQL_ADMIN}'")
        sql_admin = CONSTANTS.DEFAULT_SQL_ADMIN

    mode = config.get(CONSTANTS.CONFIG_MODE) or CONSTANTS.DEFAULT_MODE
    name_prefix = config.get(CONSTANTS.CONFIG_NAME_PREFIX) or ""

    return StackConfig(
        sql_admin=validate_sql_admin(sql_admin),
        mode=mode,
        name_prefix=name_prefix,
    )
