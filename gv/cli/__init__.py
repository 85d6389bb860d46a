"""Command line interface (`gv`)."""
