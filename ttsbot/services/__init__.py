"""Voice option handling, option storage and speech synthesis."""
