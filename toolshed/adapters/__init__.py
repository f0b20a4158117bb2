"""
Adapters — everything that talks to the outside world.

    base.py              ReleaseProvider contract
    github.py            GitHub releases over HTTPS
    shell/filesystem.py  archive extraction, symlinks, scripts
"""
