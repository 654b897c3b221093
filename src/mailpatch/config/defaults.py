"""Starter .mailpatch.toml template."""

CONFIG_FILENAME = ".mailpatch.toml"

DEFAULT_TOML = """\
# mailpatch configuration
version = "1.0"

[output]
directory = "patches"     # where rebuilt patches are written
format = "terminal"       # terminal | json | yaml
overwrite = false
show_summary = true
encoding = "utf-8"        # encoding of written patch files

[convert]
keep_failed = true        # write unreliable patches as *.warning.patch
fail_on_warning = false   # exit 1 if any message fails recognition
lf_suffixes = [".sh"]     # ascii hunks of these files keep LF line endings
"""
