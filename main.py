# main.py
import sys

from robopath.app.cli import main

if __name__ == "__main__":
    sys.exit(main())
