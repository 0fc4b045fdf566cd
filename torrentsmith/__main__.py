"""Allow ``python -m torrentsmith``."""

from __future__ import annotations

from torrentsmith.cli.main import main

if __name__ == "__main__":
    main()
