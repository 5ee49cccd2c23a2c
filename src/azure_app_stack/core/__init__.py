"""
Core abstractions for the Azure app stack.

Modules:
    context: StackConfig dataclass
    config_loader: Stack configuration loading and validation
    exceptions: Custom exception types

Usage:
    from azure_app_stack.core import load_stack_config, StackConfig
"""

from .context import StackConfig
from .config_loader import load_stack_config, validate_sql_admin
from .exceptions import (
    StackError,
    ConfigurationError,
    ResourceDeclarationError,
    PulumiCommandError,
)

__all__ = [
    "StackConfig",
    "load_stack_config",
    "validate_sql_admin",
    "StackError",
    "ConfigurationError",
    "ResourceDeclarationError",
    "PulumiCommandError",
]
