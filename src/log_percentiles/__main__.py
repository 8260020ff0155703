"""Module entrypoint.

Allows:
    python -m log_percentiles
"""

from __future__ import annotations

from log_percentiles.cli import main

if __name__ == "__main__":
    main()
