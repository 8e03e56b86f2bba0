#!/usr/bin/env python3
"""
ABOUTME: Entry point for the required environment variable checker
ABOUTME: Simple wrapper that imports and runs the CLI
"""

from required_env.cli import main

if __name__ == "__main__":
    main()
