"""
Stack configuration classes.

The Pulumi program never reads ``pulumi.Config`` directly. All values are
loaded once into a StackConfig (see config_loader) and passed explicitly
to the functions that declare resources.
"""

from dataclasses import dataclass

from azure_app_stack import constants as CONSTANTS


@dataclass
class StackConfig:
    """
    Parsed stack configuration.

    Attributes:
        sql_admin: Administrator login of the SQL server
        mode: Run mode, "DEBUG" enables debug logging
        name_prefix: Prefix for every logical resource name (may be empty)
    """

    sql_admin: str = CONSTANTS.DEFAULT_SQL_ADMIN
    mode: str = CONSTANTS.DEFAULT_MODE
    name_prefix: str = ""

    @property
    def debug_mode(self) -> bool:
        """True when the stack runs in DEBUG mode."""
        return self.mode.upper() == "DEBUG"
