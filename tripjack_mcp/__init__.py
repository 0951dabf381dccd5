"""Tripjack flight search and booking over HTTP and MCP."""

__version__ = "0.1.0"
