"""Data model for quasi: symbols, expression nodes, scopes, promises and quotes."""
