"""fanlog subcommands."""
