"""
Connection string builders.

Pure string builders plus the Output-level wrappers that feed them with
resolved resource attributes. Everything that carries a password or an
account key is returned as a secret Output.
"""

import pulumi
from pulumi_azure_native import storage

from azure_app_stack import constants as CONSTANTS


def build_sql_connection_string(server: str, database: str, username: str, password: str) -> str:
    """
    Build the ADO.NET connection string for the Azure SQL database.

    Args:
        server: SQL server name (without the database.windows.net suffix)
        database: Database name
        username: Administrator login
        password: Administrator password

    Returns:
        Connection string with encryption on and MARS off
    """
    return (
        f"Server=tcp:{server}.{CONSTANTS.SQL_HOST_SUFFIX},{CONSTANTS.SQL_PORT};"
        f"Initial Catalog={database};"
        "Persist Security Info=False;"
        f"User ID={username};"
        f"Password={password};"
        "MultipleActiveResultSets=False;"
        "Encrypt=True;"
        "TrustServerCertificate=False;"
        f"Connection Timeout={CONSTANTS.SQL_CONNECTION_TIMEOUT_SECONDS};"
    )


def build_storage_connection_string(account_name: str, account_key: str) -> str:
    """Build the connection string of a storage account from one of its keys."""
    return (
        "DefaultEndpointsProtocol=https;"
        f"AccountName={account_name};"
        f"AccountKey={account_key};"
        f"EndpointSuffix={CONSTANTS.STORAGE_ENDPOINT_SUFFIX}"
    )


def build_app_insights_connection_string(instrumentation_key: str) -> str:
    return f"InstrumentationKey={instrumentation_key}"


def sql_connection_string(
    server_name: pulumi.Input[str],
    database_name: pulumi.Input[str],
    username: str,
    password: pulumi.Input[str],
) -> pulumi.Output[str]:
    """
    Combine SQL server outputs into the database connection string.

    Args:
        server_name: Resolved name of the SQL server
        database_name: Resolved name of the database
        username: Administrator login (plain config value)
        password: Administrator password (usually RandomPassword.result)

    Returns:
        Secret Output with the connection string
    """
    return pulumi.Output.secret(
        pulumi.Output.all(server_name, database_name, password).apply(
            lambda args: build_sql_connection_string(args[0], args[1], username, args[2])
        )
    )


def storage_connection_string(
    resource_group_name: pulumi.Input[str],
    account_name: pulumi.Input[str],
) -> pulumi.Output[str]:
    """
    Compose the primary connection string of a storage account.

    azure-native has no connection string attribute on StorageAccount, so the
    first access key is fetched with listStorageAccountKeys.
    """
    keys = storage.list_storage_account_keys_output(
        resource_group_name=resource_group_name,
        account_name=account_name,
    )
    return pulumi.Output.secret(
        pulumi.Output.all(account_name, keys.apply(lambda result: result.keys[0].value)).apply(
            lambda args: build_storage_connection_string(args[0], args[1])
        )
    )


def app_insights_connection_string(instrumentation_key: pulumi.Input[str]) -> pulumi.Output[str]:
    return pulumi.Output.from_input(instrumentation_key).apply(build_app_insights_connection_string)
