"""Allow `python -m dilemma`."""

from .cli import main

main()
