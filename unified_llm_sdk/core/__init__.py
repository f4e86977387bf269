"""Provider-independent core logic."""
