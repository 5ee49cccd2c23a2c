"""
Logical resource naming for the Azure app stack.

Pulumi logical names identify resources in the stack state (their URNs);
the physical Azure names are auto-generated from them by the provider.
Changing a logical name therefore replaces the resource.

Naming Convention:
    - Resource Group: resourceGroup
    - Storage Account: storage
    - Admin Password: password
    - SQL Server / Database: sql / db
    - App Service Plan: asp
    - App Insights: appInsights-back, appInsights-front
    - App Services: backend, frontend
    - Firewall Rules: FR{ip}

    With a prefix configured, every name becomes {prefix}-{name}.

Usage:
    from azure_app_stack.naming import AppStackNaming

    naming = AppStackNaming()
    naming.sql_server()           # "sql"
    naming.firewall_rule("1.2.3.4")  # "FR1.2.3.4"
"""


class AppStackNaming:
    """
    Generates logical names for every resource of the stack.

    Attributes:
        prefix: Optional prefix shared by all names
    """

    def __init__(self, prefix: str = ""):
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        """Get the name prefix."""
        return self._prefix

    def _name(self, base: str) -> str:
        if self._prefix:
            return f"{self._prefix}-{base}"
        return base

    # ==========================================
    # Shared Resources
    # ==========================================

    def resource_group(self) -> str:
        return self._name("resourceGroup")

    def storage_account(self) -> str:
        return self._name("storage")

    def app_service_plan(self) -> str:
        return self._name("asp")

    # ==========================================
    # Data Layer
    # ==========================================

    def admin_password(self) -> str:
        return self._name("password")

    def sql_server(self) -> str:
        return self._name("sql")

    def database(self) -> str:
        return self._name("db")

    def firewall_rule(self, ip: str) -> str:
        """Firewall rule name for one outbound IP of the backend."""
        return self._name(f"FR{ip}")

    # ==========================================
    # Web Apps
    # ==========================================

    def backend_app(self) -> str:
        return self._name("backend")

    def frontend_app(self) -> str:
        return self._name("frontend")

    def backend_app_insights(self) -> str:
        return self._name("appInsights-back")

    def frontend_app_insights(self) -> str:
        return self._name("appInsights-front")
