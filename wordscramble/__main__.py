from .game import _cli

_cli()
