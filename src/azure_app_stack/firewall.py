"""
SQL firewall exceptions for the backend's outbound addresses.

The backend app service reports its possible outbound IPs as one
comma-separated string. Each address gets its own single-address firewall
rule on the SQL server, so the rule set is only known once that output
resolves and the rules are declared inside ``apply``.
"""

import ipaddress
import logging
from typing import List

import pulumi
from pulumi_azure_native import sql

from azure_app_stack.core.exceptions import ResourceDeclarationError
from azure_app_stack.naming import AppStackNaming

logger = logging.getLogger(__name__)


def parse_outbound_ips(ips: str) -> List[str]:
    """
    Split a comma-separated outbound IP list.

    Args:
        ips: Value of the app service's outbound IP addresses

    Returns:
        One entry per address in first-seen order, whitespace stripped,
        empty and duplicate entries dropped

    Raises:
        ResourceDeclarationError: If an entry is not a valid IP address

    Example:
        >>> parse_outbound_ips("1.2.3.4, 5.6.7.8, 1.2.3.4")
        ['1.2.3.4', '5.6.7.8']
    """
    if not ips:
        return []

    addresses = []
    for entry in ips.split(","):
        entry = entry.strip()
        if not entry:
            continue
        try:
            ipaddress.ip_address(entry)
        except ValueError:
            raise ResourceDeclarationError(
                "sql.FirewallRule",
                f"'{entry}' is not a valid outbound IP address"
            )
        if entry in addresses:
            logger.debug(f"Skipping duplicate outbound IP {entry}")
            continue
        addresses.append(entry)
    return addresses


def create_firewall_rules(
    ips: str,
    resource_group_name: pulumi.Input[str],
    server_name: pulumi.Input[str],
    naming: AppStackNaming,
) -> List[sql.FirewallRule]:
    """
    Declare one single-address firewall rule per outbound IP.

    Args:
        ips: Resolved comma-separated outbound IP list
        resource_group_name: Resource group of the SQL server
        server_name: Name of the SQL server
        naming: Logical naming for the rules

    Returns:
        The declared firewall rules, in list order
    """
    rules = []
    for ip in parse_outbound_ips(ips):
        rule_name = naming.firewall_rule(ip)
        logger.debug(f"Declaring firewall rule {rule_name}")
        rules.append(sql.FirewallRule(
            rule_name,
            resource_group_name=resource_group_name,
            server_name=server_name,
            start_ip_address=ip,
            end_ip_address=ip,
        ))
    logger.info(f"Declared {len(rules)} SQL firewall rule(s)")
    return rules


def declare_firewall_rules(
    outbound_ips: pulumi.Output[str],
    resource_group_name: pulumi.Input[str],
    server_name: pulumi.Input[str],
    naming: AppStackNaming,
) -> pulumi.Output[List[sql.FirewallRule]]:
    """Declare the firewall rules once the outbound IP list resolves."""
    return outbound_ips.apply(
        lambda ips: create_firewall_rules(ips, resource_group_name, server_name, naming)
    )
