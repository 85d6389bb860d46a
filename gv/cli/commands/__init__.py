"""gv subcommands."""
