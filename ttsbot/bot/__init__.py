"""Discord wiring: bot, commands, message and voice events."""
