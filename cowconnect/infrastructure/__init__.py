"""Infrastructure layer: Firestore, external services, storage and security adapters."""
