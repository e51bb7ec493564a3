"""Track current and previous application versions across hosts."""
