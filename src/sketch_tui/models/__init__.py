"""Message types carried through the run loop."""
