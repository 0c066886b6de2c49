"""Adapters connecting the core to files, terminals and the command line."""
