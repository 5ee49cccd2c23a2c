"""Pulumi program entry point for the Azure app stack."""

import os
import sys

# Allow running from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from azure_app_stack.stack import run

run()
