"""
CLI Module.

Command-line front-end built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- Note rules live in notesync.services
- The remote store is reached over HTTP (httpx)

Usage:
    python cli.py --help
    python cli.py note list -s groceries
    python cli.py note edit 2
    python cli.py note edit --recover
"""
