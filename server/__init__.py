"""Documentation server: file store, HTTP API and platform uplink."""
