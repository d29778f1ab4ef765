"""Intent parsing, event lookup and command execution."""
