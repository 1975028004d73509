"""User and authentication adapters."""
