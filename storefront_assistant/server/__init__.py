"""
REST API server for the storefront assistant.
"""

from storefront_assistant.server.app import create_app, get_engine, get_handler, run_server

__all__ = ["create_app", "get_engine", "get_handler", "run_server"]
