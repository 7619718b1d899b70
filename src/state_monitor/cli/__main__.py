"""
Allow running statemonctl as a module: python -m state_monitor.cli
"""

import sys
from .statemonctl import main

if __name__ == "__main__":
    sys.exit(main())
