"""Terminal-facing state that sits between the store and the renderer."""
