"""Core relay components: configuration, logging, signing and upstream access."""
