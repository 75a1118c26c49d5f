"""Sources: read snapshots and credential files."""
