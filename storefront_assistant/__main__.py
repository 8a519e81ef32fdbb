"""
Entry point for running storefront-assistant as a module.

Usage: python -m storefront_assistant
"""

from storefront_assistant.cli import main

if __name__ == "__main__":
    main()
