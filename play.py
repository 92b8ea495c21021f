from __future__ import annotations

from qirkat.cli import main


if __name__ == "__main__":
    main()
