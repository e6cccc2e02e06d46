#!/usr/bin/env python
"""
Recursive Agent CLI entry point.

Usage:
    python cli.py run "Plan a trip to Japan"        # Live tree in the terminal
    python cli.py run --json -d 2 "Plan a trip"     # SSE-framed snapshots
    python cli.py serve --port 8000                 # Streaming HTTP API
"""

from recursive_agent.cli.app import main

if __name__ == "__main__":
    main()
