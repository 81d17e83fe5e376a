"""Terminal UI for browsing and editing the task graph."""
