"""FHEVM examples generator: scaffolds, documents and validates FHEVM example projects."""

__version__ = "0.1.0"
