"""Documentation delivery for scaffolded FHEVM examples."""

from fhevm_examples.reporter.gitbook import GitBookGenerator, GitBookPage, GitBookResult

__all__ = [
    "GitBookGenerator",
    "GitBookPage",
    "GitBookResult",
]
