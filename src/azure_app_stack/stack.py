"""
Azure app stack - resource declarations.

Declares the full topology in dependency order:
    1. Resource group
    2. Storage account
    3. SQL server (random admin password) and database
    4. App service plan
    5. Backend app (App Insights, SQL + blob connection strings)
    6. Frontend app (App Insights)
    7. SQL firewall rules for the backend's outbound IPs

Ordering, diffing and retries are left to the Pulumi engine; this module
only wires the resources together.

Usage (inside a Pulumi program):
    from azure_app_stack.stack import run
    run()
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import pulumi
import pulumi_random as random
from pulumi_azure_native import insights, resources, sql, storage, web

from azure_app_stack import constants as CONSTANTS
from azure_app_stack.connection_strings import (
    app_insights_connection_string,
    sql_connection_string,
    storage_connection_string,
)
from azure_app_stack.core.config_loader import load_stack_config
from azure_app_stack.core.context import StackConfig
from azure_app_stack.firewall import declare_firewall_rules
from azure_app_stack.logger import configure_logger
from azure_app_stack.naming import AppStackNaming

logger = logging.getLogger(__name__)


@dataclass
class AppStack:
    """Handles to every resource declared by create_stack()."""

    resource_group: resources.ResourceGroup
    storage_account: storage.StorageAccount
    admin_password: random.RandomPassword
    sql_server: sql.Server
    database: sql.Database
    app_service_plan: web.AppServicePlan
    backend_insights: insights.Component
    backend: web.WebApp
    frontend_insights: insights.Component
    frontend: web.WebApp
    firewall_rules: pulumi.Output[List[sql.FirewallRule]]

    @property
    def backend_url(self) -> pulumi.Output[str]:
        return self.backend.default_host_name

    @property
    def frontend_url(self) -> pulumi.Output[str]:
        return self.frontend.default_host_name


def _app_insights(name: str, resource_group: resources.ResourceGroup) -> insights.Component:
    return insights.Component(
        name,
        resource_group_name=resource_group.name,
        application_type=CONSTANTS.APP_INSIGHTS_APPLICATION_TYPE,
        kind=CONSTANTS.APP_INSIGHTS_KIND,
    )


def _monitoring_settings(component: insights.Component) -> List[web.NameValuePairArgs]:
    """App settings that attach an app service to its App Insights component."""
    return [
        web.NameValuePairArgs(
            name=CONSTANTS.SETTING_INSTRUMENTATION_KEY,
            value=component.instrumentation_key,
        ),
        web.NameValuePairArgs(
            name=CONSTANTS.SETTING_APP_INSIGHTS_CONNECTION_STRING,
            value=app_insights_connection_string(component.instrumentation_key),
        ),
        web.NameValuePairArgs(
            name=CONSTANTS.SETTING_APP_INSIGHTS_AGENT_VERSION,
            value=CONSTANTS.APP_INSIGHTS_AGENT_VERSION,
        ),
    ]


def _web_app(
    name: str,
    resource_group: resources.ResourceGroup,
    plan: web.AppServicePlan,
    app_settings: List[web.NameValuePairArgs],
    connection_strings: Optional[List[web.ConnStringInfoArgs]] = None,
) -> web.WebApp:
    return web.WebApp(
        name,
        resource_group_name=resource_group.name,
        server_farm_id=plan.id,
        site_config=web.SiteConfigArgs(
            app_settings=app_settings,
            connection_strings=connection_strings,
        ),
    )


def create_stack(config: StackConfig) -> AppStack:
    """
    Declare all resources of the stack.

    Args:
        config: Loaded stack configuration

    Returns:
        AppStack with handles to the declared resources
    """
    naming = AppStackNaming(config.name_prefix)

    # Resource group
    resource_group = resources.ResourceGroup(naming.resource_group())

    # Storage account
    storage_account = storage.StorageAccount(
        naming.storage_account(),
        resource_group_name=resource_group.name,
        kind=CONSTANTS.STORAGE_ACCOUNT_KIND,
        sku=storage.SkuArgs(
            name=f"{CONSTANTS.STORAGE_ACCOUNT_TIER}_{CONSTANTS.STORAGE_REPLICATION_TYPE}",
        ),
    )

    # SQL server and database
    admin_password = random.RandomPassword(
        naming.admin_password(),
        length=CONSTANTS.ADMIN_PASSWORD_LENGTH,
        special=True,
        min_special=CONSTANTS.ADMIN_PASSWORD_MIN_SPECIAL,
    )

    sql_server = sql.Server(
        naming.sql_server(),
        resource_group_name=resource_group.name,
        administrator_login=config.sql_admin,
        administrator_login_password=admin_password.result,
        version=CONSTANTS.SQL_SERVER_VERSION,
    )

    database = sql.Database(
        naming.database(),
        resource_group_name=resource_group.name,
        server_name=sql_server.name,
        sku=sql.SkuArgs(name=CONSTANTS.SQL_SERVICE_OBJECTIVE),
    )

    # App service plan shared by both apps
    app_service_plan = web.AppServicePlan(
        naming.app_service_plan(),
        resource_group_name=resource_group.name,
        kind=CONSTANTS.APP_SERVICE_PLAN_KIND,
        sku=web.SkuDescriptionArgs(
            tier=CONSTANTS.APP_SERVICE_PLAN_TIER,
            name=CONSTANTS.APP_SERVICE_PLAN_SIZE,
        ),
    )

    # Backend
    backend_insights = _app_insights(naming.backend_app_insights(), resource_group)
    backend = _web_app(
        naming.backend_app(),
        resource_group,
        app_service_plan,
        app_settings=_monitoring_settings(backend_insights),
        connection_strings=[
            web.ConnStringInfoArgs(
                name=CONSTANTS.SQL_CONNECTION_NAME,
                type=CONSTANTS.SQL_CONNECTION_TYPE,
                connection_string=sql_connection_string(
                    sql_server.name,
                    database.name,
                    config.sql_admin,
                    admin_password.result,
                ),
            ),
            web.ConnStringInfoArgs(
                name=CONSTANTS.BLOB_CONNECTION_NAME,
                type=CONSTANTS.BLOB_CONNECTION_TYPE,
                connection_string=storage_connection_string(
                    resource_group.name,
                    storage_account.name,
                ),
            ),
        ],
    )

    # Frontend
    frontend_insights = _app_insights(naming.frontend_app_insights(), resource_group)
    frontend = _web_app(
        naming.frontend_app(),
        resource_group,
        app_service_plan,
        app_settings=_monitoring_settings(frontend_insights),
    )

    # SQL firewall exceptions for the backend
    firewall_rules = declare_firewall_rules(
        backend.outbound_ip_addresses,
        resource_group.name,
        sql_server.name,
        naming,
    )

    logger.debug("All stack resources declared")

    return AppStack(
        resource_group=resource_group,
        storage_account=storage_account,
        admin_password=admin_password,
        sql_server=sql_server,
        database=database,
        app_service_plan=app_service_plan,
        backend_insights=backend_insights,
        backend=backend,
        frontend_insights=frontend_insights,
        frontend=frontend,
        firewall_rules=firewall_rules,
    )


def export_outputs(app_stack: AppStack) -> None:
    """Export the stack outputs consumed by deployment tooling."""
    pulumi.export(CONSTANTS.OUTPUT_BACKEND_URL, app_stack.backend_url)
    pulumi.export(CONSTANTS.OUTPUT_FRONTEND_URL, app_stack.frontend_url)
    pulumi.export(CONSTANTS.OUTPUT_RESOURCE_GROUP_NAME, app_stack.resource_group.name)
    pulumi.export(CONSTANTS.OUTPUT_BACKEND_APP_NAME, app_stack.backend.name)
    pulumi.export(CONSTANTS.OUTPUT_FRONTEND_APP_NAME, app_stack.frontend.name)
    pulumi.export(CONSTANTS.OUTPUT_SQL_SERVER_NAME, app_stack.sql_server.name)
    pulumi.export(CONSTANTS.OUTPUT_DATABASE_NAME, app_stack.database.name)


def run() -> AppStack:
    """Entry point of the Pulumi program."""
    config = load_stack_config()
    configure_logger(config.mode)
    logger.info(f"Declaring Azure app stack '{pulumi.get_stack()}'")

    app_stack = create_stack(config)
    export_outputs(app_stack)
    return app_stack
