from __future__ import annotations

import sys

from prd.cli import main


if __name__ == "__main__":
    # Default to the 25% example when run without arguments.
    raise SystemExit(main(sys.argv[1:] or ["25"]))
