#!/usr/bin/env python3
"""bftape command line entry point.

Run programs without installing the package.

Usage:
    python main.py programs/hello.bf
    python main.py --inline "+++++." --summary
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from bftape.cli import main


if __name__ == "__main__":
    sys.exit(main())
