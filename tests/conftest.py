import os
import sys

import pytest
import pulumi

# Set PYTHONPATH to include src if not already there
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))


@pytest.fixture(scope="function", autouse=True)
def mock_env_vars(monkeypatch):
    """Set mock Azure credentials to prevent accidental cloud calls."""
    monkeypatch.setenv("ARM_SUBSCRIPTION_ID", "00000000-0000-0000-0000-000000000000")
    monkeypatch.setenv("ARM_TENANT_ID", "testing")
    monkeypatch.setenv("ARM_CLIENT_ID", "testing")
    monkeypatch.setenv("ARM_CLIENT_SECRET", "testing")


BACKEND_OUTBOUND_IPS = "20.50.2.1,20.50.2.2,20.50.2.3"
MOCK_PASSWORD = "Xq7!mR2pL9#vT4wz"
MOCK_STORAGE_KEY = "bW9jay1zdG9yYWdlLWtleQ=="


class AppStackMocks(pulumi.runtime.Mocks):
    """
    Pulumi engine mocks for the stack's resource types.

    Every registered resource is recorded as (type, name, inputs) so tests
    can inspect what was declared.
    """

    def __init__(self):
        self.resources = []
        self.calls = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append((args.typ, args.name, dict(args.inputs)))
        state = {**args.inputs, "name": args.inputs.get("name", args.name)}

        if args.typ == "azure-native:web:WebApp":
            state["defaultHostName"] = f"{args.name}.azurewebsites.net"
            state["outboundIpAddresses"] = BACKEND_OUTBOUND_IPS
        elif args.typ == "azure-native:insights:Component":
            state["instrumentationKey"] = f"{args.name}-ikey"
        elif args.typ == "random:index/randomPassword:RandomPassword":
            state["result"] = MOCK_PASSWORD

        return [f"{args.name}_id", state]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append((args.token, dict(args.args)))
        if args.token == "azure-native:storage:listStorageAccountKeys":
            return {"keys": [{"keyName": "key1", "value": MOCK_STORAGE_KEY, "permissions": "Full"}]}
        return {}

    def declared(self, typ: str) -> list:
        """Get (name, inputs) of every declared resource of a type."""
        return [(name, inputs) for t, name, inputs in self.resources if t == typ]


@pytest.fixture(scope="function")
def pulumi_mocks():
    """Install fresh Pulumi mocks for one test."""
    mocks = AppStackMocks()
    pulumi.runtime.set_mocks(mocks, project="azure-app-stack", stack="test", preview=False)
    return mocks
