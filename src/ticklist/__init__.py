"""ticklist - personal task tracker with a CLI and an interactive terminal UI."""
