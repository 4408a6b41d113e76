"""routerforge CLI: Typer-based command-line interface.

Provides the ``routerforge`` command with one subcommand per operation:
deploying contracts, reconciling executors, provisioning roles, and funding
the deploy wallet on simulation forks.

All output uses Rich for formatted terminal display.
"""
