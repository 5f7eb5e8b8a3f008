"""Entry point for running as module: python -m swaprelay"""

# Load .env file before importing anything else
from dotenv import load_dotenv
load_dotenv()

import sys

from swaprelay.cli import main

if __name__ == "__main__":
    sys.exit(main())
