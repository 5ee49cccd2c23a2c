"""Azure web application topology declared with Pulumi."""

__version__ = "0.1.0"
