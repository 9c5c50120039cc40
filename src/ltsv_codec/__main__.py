"""Module entrypoint.

Allows:
    python -m ltsv_codec
"""

from __future__ import annotations

from ltsv_codec.server.ltsv_server import main

if __name__ == "__main__":
    main()
