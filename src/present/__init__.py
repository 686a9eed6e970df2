"""Sort and render annotated scan results."""
