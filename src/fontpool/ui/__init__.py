"""User interfaces for fontpool."""
