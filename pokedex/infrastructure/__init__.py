"""Infrastructure layer: IO and integrations with remote services."""
