"""
Azure App Stack Manager - CLI Entry Point.

Drives the Pulumi engine for the local project through the Automation API
and runs the Azure-side pre-flight and status checks.

Usage:
    azure-app-stack [--stack dev] [--work-dir .] [--debug] <command> [args]
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from azure_app_stack import constants as CONSTANTS
from azure_app_stack import logger as app_logger
from azure_app_stack.core.config_loader import validate_sql_admin
from azure_app_stack.credentials_checker import check_azure_credentials, load_azure_credentials
from azure_app_stack.pulumi_runner import PulumiRunner
from azure_app_stack.status import check_deployment

COMMANDS = {
    "preview", "up", "refresh", "destroy", "outputs",
    "info_config", "set_sql_admin", "check_credentials", "check", "help",
}

# Commands that do not need a selected stack
LOCAL_COMMANDS = {"help", "check_credentials"}


def help_menu():
    print("""
Available commands:

Deployment commands:
  preview                     - Shows the changes an update would make.
  up                          - Creates or updates all stack resources.
  refresh                     - Refreshes the stack state from Azure.
  destroy                     - Destroys all stack resources.

Info commands:
  outputs                     - Shows the stack outputs (BackendUrl, FrontendUrl, ...).
  info_config                 - Shows the stack configuration.
  set_sql_admin <name>        - Sets the SQL administrator login.

Checks:
  check_credentials           - Verifies the Azure credentials (ARM_* variables).
  check                       - Checks the deployed resource group and app services.

Other commands:
  help                        - Show this help menu.
""")


def get_work_dir(work_dir: Optional[str] = None) -> str:
    """Get the project directory holding Pulumi.yaml."""
    return os.path.abspath(work_dir or os.getcwd())


def handle_info_config(runner: PulumiRunner) -> None:
    """Show configuration."""
    config = runner.get_config()
    print(f"Stack: {runner.stack_name}")
    if not config:
        print(f"No config set. '{CONSTANTS.CONFIG_SQL_ADMIN}' defaults to '{CONSTANTS.DEFAULT_SQL_ADMIN}'.")
        return
    print(json.dumps(config, indent=2))


def handle_set_sql_admin(runner: PulumiRunner, name: str) -> None:
    username = validate_sql_admin(name)
    runner.set_config(CONSTANTS.CONFIG_SQL_ADMIN, username)
    print(f"SQL administrator login set to: {username}")


def handle_check_credentials() -> bool:
    result = check_azure_credentials(load_azure_credentials())
    print(f"[{result['status'].upper()}] {result['message']}")
    return result["status"] == "valid"


def handle_check(runner: PulumiRunner) -> None:
    status = check_deployment(runner.outputs(), load_azure_credentials())

    rg = status["resource_group"]
    print(f"Resource Group: {rg['name']} ({'exists' if rg['exists'] else 'missing'})")
    for role, app in status["apps"].items():
        url = f"https://{app['url']}" if app["url"] else "-"
        print(f"{role.capitalize()}: {app['name']} [{app['state']}] {url}")


def run_command(command: str, args: List[str], runner: Optional[PulumiRunner]) -> int:
    """
    Execute one CLI command.

    Args:
        command: Command name (see help_menu)
        args: Remaining positional arguments
        runner: PulumiRunner for the selected stack (None for local commands)

    Returns:
        Process exit code: 0 on success, 1 on failure, 2 on usage errors
    """
    if command == "help":
        help_menu()
        return 0

    if command == "check_credentials":
        return 0 if handle_check_credentials() else 1

    if command == "preview":
        changes = runner.preview()
        print(f"Changes: {json.dumps(changes)}")
    elif command == "up":
        outputs = runner.up()
        print(json.dumps(outputs, indent=2))
    elif command == "refresh":
        runner.refresh()
    elif command == "destroy":
        runner.destroy()
    elif command == "outputs":
        print(json.dumps(runner.outputs(), indent=2))
    elif command == "info_config":
        handle_info_config(runner)
    elif command == "set_sql_admin":
        if len(args) != 1:
            print("Usage: set_sql_admin <name>")
            return 2
        handle_set_sql_admin(runner, args[0])
    elif command == "check":
        handle_check(runner)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Azure App Stack Manager")
    parser.add_argument("--stack", default=CONSTANTS.DEFAULT_STACK_NAME, help="Name of the Pulumi stack")
    parser.add_argument("--work-dir", help="Project directory containing Pulumi.yaml (default: cwd)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("command", help="Command to run, see 'help'")
    parser.add_argument("args", nargs="*", help="Command arguments")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = app_logger.configure_logger("DEBUG" if args.debug else CONSTANTS.DEFAULT_MODE)

    if args.command not in COMMANDS:
        print(f"Unknown command: {args.command}. Type 'help' for a list of commands.")
        return 2

    try:
        runner = None
        if args.command not in LOCAL_COMMANDS:
            runner = PulumiRunner(get_work_dir(args.work_dir), args.stack)
            logger.info(f"Executing '{args.command}' on stack '{args.stack}'...")
        return run_command(args.command, args.args, runner)
    except Exception as e:
        print(f"Error: {e}")
        app_logger.print_stack_trace()
        return 1


if __name__ == "__main__":
    sys.exit(main())
