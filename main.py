#!/usr/bin/env python3
"""
BoatSafe main entry point for hosted deployment.

The platform runs `python main.py` when this file is present.
This starts the Flask dashboard server.
"""

import os
import sys


def resolve_port(port_env: str) -> int:
    """Parse the PORT environment value, falling back to 8000."""
    # Some platforms pass '$PORT' as a literal string
    if port_env == '$PORT':
        print("Warning: Got literal '$PORT', using default port 8000")
        return 8000
    try:
        return int(port_env)
    except (ValueError, TypeError):
        print(f"Warning: Invalid PORT value '{port_env}', using default port 8000")
        return 8000


def main():
    """Start BoatSafe dashboard server."""
    port = resolve_port(os.environ.get('PORT', '8000'))

    print(f"Starting BoatSafe dashboard on port {port}")

    from boatsafe.run import main as run_main

    # Override sys.argv to pass server mode and port
    sys.argv = ['main.py', '--mode', 'serve', '--port', str(port)]

    run_main()

if __name__ == '__main__':
    main()
