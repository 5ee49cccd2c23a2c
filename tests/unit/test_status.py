"""
Unit tests for the deployment status check.
"""

import pytest
from unittest.mock import MagicMock, patch

from azure.core.exceptions import ResourceNotFoundError

from azure_app_stack.status import check_deployment

CREDENTIALS = {"azure_subscription_id": "sub-123"}

OUTPUTS = {
    "BackendUrl": "backend1234.azurewebsites.net",
    "FrontendUrl": "frontend5678.azurewebsites.net",
    "ResourceGroupName": "resourceGroup1a2b",
    "BackendAppName": "backend1234",
    "FrontendAppName": "frontend5678",
}


@pytest.fixture
def clients():
    resource_client = MagicMock()
    web_client = MagicMock()
    with patch("azure_app_stack.status.get_credential") as mock_credential, \
         patch("azure.mgmt.resource.ResourceManagementClient", return_value=resource_client) as mock_rm, \
         patch("azure.mgmt.web.WebSiteManagementClient", return_value=web_client) as mock_web:
        yield {
            "credential": mock_credential,
            "resource": resource_client,
            "web": web_client,
            "resource_cls": mock_rm,
            "web_cls": mock_web,
        }


class TestCheckDeployment:

    def test_requires_resource_group_output(self, clients):
        with pytest.raises(ValueError, match="Run 'up' first"):
            check_deployment({}, CREDENTIALS)

    def test_requires_subscription(self, clients):
        with pytest.raises(ValueError, match="azure_subscription_id"):
            check_deployment(OUTPUTS, {})

    def test_running_apps(self, clients):
        clients["resource"].resource_groups.check_existence.return_value = True
        clients["web"].web_apps.get.return_value = MagicMock(state="Running")

        status = check_deployment(OUTPUTS, CREDENTIALS)

        assert status["resource_group"] == {"name": "resourceGroup1a2b", "exists": True}
        assert status["apps"]["backend"] == {
            "name": "backend1234",
            "url": "backend1234.azurewebsites.net",
            "state": "Running",
        }
        assert status["apps"]["frontend"]["state"] == "Running"
        clients["web"].web_apps.get.assert_any_call("resourceGroup1a2b", "frontend5678")
        clients["resource_cls"].assert_called_once_with(
            credential=clients["credential"].return_value,
            subscription_id="sub-123"
        )

    def test_missing_app(self, clients):
        clients["resource"].resource_groups.check_existence.return_value = True

        def get_app(resource_group, name):
            if name == "frontend5678":
                raise ResourceNotFoundError(message="not found")
            return MagicMock(state="Stopped")

        clients["web"].web_apps.get.side_effect = get_app

        status = check_deployment(OUTPUTS, CREDENTIALS)

        assert status["apps"]["backend"]["state"] == "Stopped"
        assert status["apps"]["frontend"]["state"] == "missing"

    def test_missing_resource_group_skips_app_lookup(self, clients):
        clients["resource"].resource_groups.check_existence.return_value = False

        status = check_deployment(OUTPUTS, CREDENTIALS)

        assert status["resource_group"]["exists"] is False
        assert {app["state"] for app in status["apps"].values()} == {"missing"}
        clients["web"].web_apps.get.assert_not_called()

    def test_unknown_state(self, clients):
        clients["resource"].resource_groups.check_existence.return_value = True
        clients["web"].web_apps.get.return_value = MagicMock(state=None)

        status = check_deployment(OUTPUTS, CREDENTIALS)

        assert status["apps"]["backend"]["state"] == "unknown"
