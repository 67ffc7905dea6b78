"""Module entrypoint for ``python -m mantui``.

All argument parsing and runtime setup happen in ``mantui.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
