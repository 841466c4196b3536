"""Application layer: use cases, ledgers, the content gate and their ports."""
