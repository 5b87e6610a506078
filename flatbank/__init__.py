"""FlatBank: a single-user bank ledger kept in flat text files."""
