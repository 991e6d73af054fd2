"""Host-editor adapters."""
