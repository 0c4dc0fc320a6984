"""One module per ``cargo member`` verb."""
