"""Token model, loading, and configuration."""
