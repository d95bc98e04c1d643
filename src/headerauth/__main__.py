# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
headerauth CLI entry point.

Usage:
    headerauth serve                          # Use ./config.yaml
    headerauth serve --config auth.yaml       # Explicit config file
    headerauth serve --app myapp.main:app     # Override the protected app
    headerauth serve --port 9000              # Override port

The configured app is wrapped with the middleware chain from the config
(errors, bearer, basic) and served with uvicorn.
"""

from __future__ import annotations

import sys

from .exceptions import ConfigError


def cmd_serve(argv: list[str]) -> int:
    """Run the protected application."""
    import uvicorn

    from .config import AuthConfig

    try:
        config = AuthConfig(argv=argv)
        app = config.build_app()
    except (ConfigError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    host = config.server["host"]
    port = int(config.server["port"])
    print("headerauth starting...", flush=True)
    print(f"App: {config.server['app']}", flush=True)
    print(f"Server: http://{host}:{port}", flush=True)
    print(flush=True)

    try:
        uvicorn.run(app, host=host, port=port)
    except KeyboardInterrupt:
        print("\nShutdown.")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    if "--version" in args or "-v" in args:
        from . import __version__

        print(f"headerauth {__version__}")
        return 0

    if not args or "--help" in args or "-h" in args:
        print("Usage: headerauth serve [options]")
        print()
        print("Options:")
        print("  --config FILE     Config file (default: ./config.yaml)")
        print("  --app MODULE:ATTR ASGI app to protect (default: server.app)")
        print("  --host HOST       Server host (default: 127.0.0.1)")
        print("  --port PORT       Server port (default: 8000)")
        print("  --version, -v     Show version")
        print("  --help, -h        Show this help")
        return 0

    subcommand = args[0]
    if subcommand != "serve":
        print(f"Error: unknown subcommand '{subcommand}'", file=sys.stderr)
        return 1

    return cmd_serve(args[1:])


if __name__ == "__main__":
    sys.exit(main())
