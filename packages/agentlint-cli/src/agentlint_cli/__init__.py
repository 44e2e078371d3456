"""agentlint command-line interface."""
