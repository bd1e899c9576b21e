#!/usr/bin/env python3
"""Standalone lockfile scanner.

Usage:
    python scan_deps.py scan /path/to/project
    python scan_deps.py scan .                       # scan current directory
    python scan_deps.py scan /path/to/project --json
    python scan_deps.py osv-queries /path/to/project
"""

from lockscan.cli import main

if __name__ == "__main__":
    main()
