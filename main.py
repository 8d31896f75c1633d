"""MercuryTrade settings - entry point.

Run this file to load (or create) the settings file:
    python main.py

Or run as a module:
    python -m mercury_config
"""

import sys
from pathlib import Path

# Add src to the import path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from mercury_config.app import main

if __name__ == "__main__":
    main()
