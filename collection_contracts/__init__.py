"""Compile data-collection schemas into declarative UI contract descriptors."""
