"""Allow `python -m loopgate`."""

from loopgate.cli import main

main()
