#!/usr/bin/env python3
"""Start the trip planner API with uvicorn, honouring the PORT environment variable."""

import os
import subprocess
import sys

port = os.environ.get("PORT", "8000")
try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

# The package lives under src/; uvicorn imports it as a top-level module.
src_path = os.path.abspath("src")
if not os.path.isdir(src_path):
    print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
    src_path = os.getcwd()

pythonpath = os.environ.get("PYTHONPATH", "")
os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path
sys.path.insert(0, src_path)

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "evplanner.main:app",
    "--host",
    os.environ.get("HOST", "0.0.0.0"),
    "--port",
    str(port_int),
    "--proxy-headers",
    "--forwarded-allow-ips", "*",
]

try:
    import evplanner.main  # noqa: F401
except Exception as e:
    print(f"Failed to import evplanner.main: {e}", file=sys.stderr)
    print(f"   PYTHONPATH: {os.environ.get('PYTHONPATH', 'NOT SET')}", file=sys.stderr)
    import traceback
    traceback.print_exc(file=sys.stderr)
    sys.exit(1)

print(f"Starting server on port {port_int}...", file=sys.stderr)
try:
    sys.exit(subprocess.call(cmd))
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
