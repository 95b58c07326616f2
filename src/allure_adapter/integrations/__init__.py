"""Host test-runner integrations."""
