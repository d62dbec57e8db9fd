#!/usr/bin/env python
"""
Launcher script for Receipt Dispatch.

Usage from repo root:
    python run_receipt_dispatch.py [--debug]

Alternative:
    python -m receipt_dispatch
"""
from receipt_dispatch.app import main

if __name__ == "__main__":
    main()
