"""Pure domain helpers (no I/O): booking dispatch and review aggregation."""
