"""Storage and Org text adapters."""
