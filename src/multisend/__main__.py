import sys

from src.multisend.cli import main

if __name__ == "__main__":
    sys.exit(main())
