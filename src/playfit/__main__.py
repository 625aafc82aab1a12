"""Allow running playfit as ``python -m playfit``."""

from playfit.cli import main

if __name__ == "__main__":
    main()
