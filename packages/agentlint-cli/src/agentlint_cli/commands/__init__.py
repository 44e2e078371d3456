"""agentlint CLI subcommands."""
