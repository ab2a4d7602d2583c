#!/usr/bin/env python3
"""
DNS Records Model - Main Entry Point

This is the main entry point for the dns-model CLI.
It can be run directly or imported as a module.
"""

from dns_records_model.cli.main import main

if __name__ == "__main__":
    main()
