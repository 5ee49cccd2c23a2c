"""
Azure Credentials Checker

Verifies, before a deployment, that the Azure credentials the provider
will use can actually see the target subscription.

Credentials are taken from the same ARM_* environment variables the
azure-native provider reads, so a successful check means ``up`` will
authenticate the same way.

Authentication Flow:
    1. ClientSecretCredential when tenant id, client id and secret are set
    2. DefaultAzureCredential otherwise (Azure CLI login, managed identity)
    3. Get the subscription (SubscriptionClient)
"""

import logging
import os
from typing import Any, Mapping, Optional

from azure_app_stack import constants as CONSTANTS

logger = logging.getLogger(__name__)


def load_azure_credentials(environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Load Azure credentials from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Dict with azure_subscription_id, azure_tenant_id, azure_client_id and
        azure_client_secret keys for every variable that is set
    """
    if environ is None:
        environ = os.environ

    credentials = {}
    for key, env_var in CONSTANTS.AZURE_CREDENTIAL_ENV_VARS.items():
        value = environ.get(env_var)
        if value:
            credentials[key] = value
    return credentials


def get_credential(credentials: dict) -> Any:
    """Get Azure credential for SDK clients."""
    from azure.identity import ClientSecretCredential, DefaultAzureCredential

    client_id = credentials.get("azure_client_id")
    client_secret = credentials.get("azure_client_secret")
    tenant_id = credentials.get("azure_tenant_id")

    if client_id and client_secret and tenant_id:
        return ClientSecretCredential(
            tenant_id=tenant_id,
            client_id=client_id,
            client_secret=client_secret
        )
    return DefaultAzureCredential()


def check_azure_credentials(credentials: dict) -> dict:
    """
    Check that the credentials can access the configured subscription.

    Args:
        credentials: Output of load_azure_credentials()

    Returns:
        {"status": "valid"|"invalid", "message": str, "subscription_id": str|None}
    """
    from azure.core.exceptions import AzureError, ClientAuthenticationError
    from azure.mgmt.resource import SubscriptionClient

    subscription_id = credentials.get("azure_subscription_id")
    if not subscription_id:
        env_var = CONSTANTS.AZURE_CREDENTIAL_ENV_VARS["azure_subscription_id"]
        return {
            "status": "invalid",
            "message": f"Missing subscription id. Set {env_var}.",
            "subscription_id": None,
        }

    try:
        client = SubscriptionClient(get_credential(credentials))
        subscription = client.subscriptions.get(subscription_id)
    except ClientAuthenticationError as e:
        logger.debug(f"Authentication failed: {e}")
        return {
            "status": "invalid",
            "message": f"Authentication failed: {e.message}",
            "subscription_id": subscription_id,
        }
    except AzureError as e:
        logger.debug(f"Subscription lookup failed: {e}")
        return {
            "status": "invalid",
            "message": f"Subscription '{subscription_id}' is not accessible: {e.message}",
            "subscription_id": subscription_id,
        }

    return {
        "status": "valid",
        "message": f"Subscription '{subscription.display_name}' ({subscription_id}) is accessible.",
        "subscription_id": subscription_id,
    }
