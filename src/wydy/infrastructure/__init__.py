"""Infrastructure layer — process spawning, script files, and the variable store."""
