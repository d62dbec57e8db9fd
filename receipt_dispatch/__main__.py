"""
Module entrypoint for `python -m receipt_dispatch`.

This allows running the application as a module from the repository root:
    python -m receipt_dispatch
"""
from receipt_dispatch.app import main

if __name__ == "__main__":
    main()
