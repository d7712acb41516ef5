"""Infrastructure layer: storage, facilitator client and payment gateway adapters."""
