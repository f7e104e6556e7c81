"""Qt widgets and drawing for the flow field."""
