# ==========================================
# 1. Stack Configuration Keys
# ==========================================
CONFIG_SQL_ADMIN = "sqlAdmin"
CONFIG_MODE = "mode"
CONFIG_NAME_PREFIX = "namePrefix"

DEFAULT_SQL_ADMIN = "pulumi"
DEFAULT_MODE = "PRODUCTION"
DEFAULT_STACK_NAME = "dev"

# Logins Azure SQL refuses for the server administrator
SQL_RESERVED_LOGINS = {
    "admin",
    "administrator",
    "sa",
    "root",
    "dbmanager",
    "loginmanager",
    "dbo",
    "guest",
    "public",
}

# ==========================================
# 2. Topology Settings
# ==========================================
STORAGE_ACCOUNT_TIER = "Standard"
STORAGE_REPLICATION_TYPE = "LRS"
STORAGE_ACCOUNT_KIND = "StorageV2"

SQL_SERVER_VERSION = "12.0"
SQL_SERVICE_OBJECTIVE = "S0"
SQL_PORT = 1433
SQL_CONNECTION_TIMEOUT_SECONDS = 30

ADMIN_PASSWORD_LENGTH = 16
ADMIN_PASSWORD_MIN_SPECIAL = 1

APP_SERVICE_PLAN_KIND = "App"
APP_SERVICE_PLAN_TIER = "Basic"
APP_SERVICE_PLAN_SIZE = "B1"

APP_INSIGHTS_APPLICATION_TYPE = "web"
APP_INSIGHTS_KIND = "web"
APP_INSIGHTS_AGENT_VERSION = "~2"

# ==========================================
# 3. App Settings & Connection Strings
# ==========================================
SETTING_INSTRUMENTATION_KEY = "APPINSIGHTS_INSTRUMENTATIONKEY"
SETTING_APP_INSIGHTS_CONNECTION_STRING = "APPLICATIONINSIGHTS_CONNECTION_STRING"
SETTING_APP_INSIGHTS_AGENT_VERSION = "ApplicationInsightsAgent_EXTENSION_VERSION"

SQL_CONNECTION_NAME = "DefaultConnection"
SQL_CONNECTION_TYPE = "SQLAzure"
BLOB_CONNECTION_NAME = "BlobStorage"
BLOB_CONNECTION_TYPE = "Custom"

SQL_HOST_SUFFIX = "database.windows.net"
STORAGE_ENDPOINT_SUFFIX = "core.windows.net"

# ==========================================
# 4. Stack Outputs
# ==========================================
OUTPUT_BACKEND_URL = "BackendUrl"
OUTPUT_FRONTEND_URL = "FrontendUrl"
OUTPUT_RESOURCE_GROUP_NAME = "ResourceGroupName"
OUTPUT_BACKEND_APP_NAME = "BackendAppName"
OUTPUT_FRONTEND_APP_NAME = "FrontendAppName"
OUTPUT_SQL_SERVER_NAME = "SqlServerName"
OUTPUT_DATABASE_NAME = "DatabaseName"

# ==========================================
# 5. Azure Credentials (environment)
# ==========================================
# Same variables the azure-native provider reads
AZURE_CREDENTIAL_ENV_VARS = {
    "azure_subscription_id": "ARM_SUBSCRIPTION_ID",
    "azure_tenant_id": "ARM_TENANT_ID",
    "azure_client_id": "ARM_CLIENT_ID",
    "azure_client_secret": "ARM_CLIENT_SECRET",
}
