"""Terminal backend, input translation and the background event source."""
