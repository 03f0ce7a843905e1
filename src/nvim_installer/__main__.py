#!/usr/bin/env python3
"""
Neovim Config Installer

Usage:
    python -m nvim_installer [--verbose] [install [--keep-going] | status]
"""

from nvim_installer.cli import main

if __name__ == "__main__":
    main()
