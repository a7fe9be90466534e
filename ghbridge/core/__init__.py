"""Process-wide plumbing shared by the CLI and library users."""
