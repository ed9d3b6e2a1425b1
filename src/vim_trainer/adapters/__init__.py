"""Host integrations for the trainer."""
