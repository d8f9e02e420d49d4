"""Allow `python -m cavegen`."""

from .cli import main

main()
