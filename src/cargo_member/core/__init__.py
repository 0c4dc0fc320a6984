"""Core building blocks: manifest editing, relocation, resolution, config."""
