#!/usr/bin/env python3
"""
Run script for the Manu-shop application.
Ensures proper Python path setup and runs the Streamlit app.
"""

import os
import subprocess
import sys


def main():
    """Set up environment and run the Streamlit app."""
    src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
    sys.path.insert(0, src_path)

    env = dict(os.environ, PYTHONPATH=src_path)

    subprocess.run([
        "streamlit",
        "run",
        os.path.join(src_path, "manu_shop", "app.py"),
        "--server.port=8503",
        "--theme.base=dark"
    ], env=env)


if __name__ == "__main__":
    main()
