"""Allow ``python -m wire_schema``."""

import sys

from wire_schema.cli import main

if __name__ == "__main__":
    sys.exit(main())
