#!/usr/bin/env python3
"""Check if client_ip_demo package is installed."""

import sys

try:
    import client_ip_demo  # noqa: F401
    sys.exit(0)
except ImportError:
    sys.exit(1)
