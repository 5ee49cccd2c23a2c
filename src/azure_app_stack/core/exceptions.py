"""
Custom exceptions for the Azure app stack.

This module defines the exceptions raised by the Pulumi program and the
operator tooling around it. Provisioning failures themselves (quota, naming
collisions, auth) are reported by the Pulumi engine, not by these classes.

Exception Hierarchy:
    StackError (base)
    ├── ConfigurationError - Invalid stack configuration value
    ├── ResourceDeclarationError - A resource input cannot be declared
    └── PulumiCommandError - An Automation API command failed
"""

from typing import Optional


class StackError(Exception):
    """
    Base exception for all errors raised by the stack code.

    Attributes:
        message: Human-readable error description
        resource: Optional logical name of the resource involved
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        self.message = message
        self.resource = resource

        if resource:
            full_message = f"{message} [resource={resource}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(StackError):
    """
    Raised when a stack configuration value is invalid.

    This typically occurs when:
    - sqlAdmin is blank or contains whitespace
    - sqlAdmin is a login Azure SQL reserves (e.g. "sa", "admin")

    Example:
        >>> load_stack_config(config)
        ConfigurationError: Invalid value for 'sqlAdmin': 'sa' is a reserved login (key: sqlAdmin)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        if config_key:
            message = f"{message} (key: {config_key})"
        super().__init__(message)


class ResourceDeclarationError(StackError):
    """
    Raised when the inputs for a resource cannot be turned into a declaration.

    Attributes:
        resource_type: Type of resource (e.g., "sql.FirewallRule")
        reason: Why the declaration was rejected
    """

    def __init__(self, resource_type: str, reason: str, resource: Optional[str] = None):
        self.resource_type = resource_type
        self.reason = reason
        super().__init__(f"Cannot declare {resource_type}: {reason}", resource=resource)


class PulumiCommandError(StackError):
    """Raised when a Pulumi Automation API command fails."""

    def __init__(self, command: str, stack_name: str, stderr: str):
        self.command = command
        self.stack_name = stack_name
        self.stderr = stderr
        super().__init__(f"Pulumi {command} failed on stack '{stack_name}': {stderr}")
