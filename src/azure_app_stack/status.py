"""
Deployment status checks.

Compares the stack outputs with what actually exists in Azure: the
resource group and the state of both app services.
"""

import logging
from typing import Any, Dict

from azure_app_stack import constants as CONSTANTS
from azure_app_stack.credentials_checker import get_credential

logger = logging.getLogger(__name__)


def _check_web_app(web_client: Any, resource_group: str, app_name: str) -> str:
    from azure.core.exceptions import ResourceNotFoundError

    try:
        site = web_client.web_apps.get(resource_group, app_name)
    except ResourceNotFoundError:
        logger.warning(f"App service not found: {app_name}")
        return "missing"
    return site.state or "unknown"


def check_deployment(outputs: Dict[str, Any], credentials: dict) -> dict:
    """
    Check the deployed resources of the stack.

    Args:
        outputs: Plain stack outputs (see PulumiRunner.outputs())
        credentials: Azure credentials (see load_azure_credentials())

    Returns:
        {
            "resource_group": {"name": str, "exists": bool},
            "apps": {"backend": {"name", "url", "state"}, "frontend": {...}},
        }

    Raises:
        ValueError: If the stack has no outputs yet or credentials lack a
            subscription id
    """
    from azure.mgmt.resource import ResourceManagementClient
    from azure.mgmt.web import WebSiteManagementClient

    resource_group = outputs.get(CONSTANTS.OUTPUT_RESOURCE_GROUP_NAME)
    if not resource_group:
        raise ValueError("Stack has no resource group output. Run 'up' first.")

    subscription_id = credentials.get("azure_subscription_id")
    if not subscription_id:
        raise ValueError("Missing required credential 'azure_subscription_id'.")

    credential = get_credential(credentials)
    resource_client = ResourceManagementClient(credential=credential, subscription_id=subscription_id)
    web_client = WebSiteManagementClient(credential=credential, subscription_id=subscription_id)

    exists = resource_client.resource_groups.check_existence(resource_group)
    status = {
        "resource_group": {"name": resource_group, "exists": bool(exists)},
        "apps": {},
    }

    apps = {
        "backend": (CONSTANTS.OUTPUT_BACKEND_APP_NAME, CONSTANTS.OUTPUT_BACKEND_URL),
        "frontend": (CONSTANTS.OUTPUT_FRONTEND_APP_NAME, CONSTANTS.OUTPUT_FRONTEND_URL),
    }
    for role, (name_key, url_key) in apps.items():
        app_name = outputs.get(name_key)
        if not exists or not app_name:
            state = "missing"
        else:
            state = _check_web_app(web_client, resource_group, app_name)
        status["apps"][role] = {
            "name": app_name,
            "url": outputs.get(url_key),
            "state": state,
        }

    return status
