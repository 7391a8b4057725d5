"""Starter .vibesafe.toml template."""

DEFAULT_TOML = """\
# VibeSafe Configuration
version = "1.0"

[scan]
fail_on = "High"          # Info | None | Low | Medium | High | Critical
# ignore_patterns = ["dist/", "\\\\.min\\\\.js$"]   # regexes searched against paths
follow_symlinks = false
max_depth = -1            # -1 = unlimited
max_file_size_kb = 0      # 0 = unlimited
workers = 1

[entropy]
enabled = true
min_entropy = 4.0
min_length = 20

[rules]
# enable = ["AWS_ACCESS_KEY_ID"]   # empty = all enabled
# disable = ["GENERIC_API_KEY"]

[output]
format = "terminal"       # terminal | markdown | json
redact = false
"""
