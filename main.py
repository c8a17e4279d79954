from __future__ import annotations

import sys

from pocket_slack.cli import main

if __name__ == "__main__":
    sys.exit(main())
