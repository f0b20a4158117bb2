"""
L0 Data — Package catalog.

Every installable package, all platforms. Pure data, no logic; the
registry turns these recipes into ``Package`` objects for the host.

Recipe fields:
    repo       Release repository (GitHub URL or owner/repo).
    module     Name passed to the native package manager (default: key).
    bin        Executable name placed in bin/ (default: key).
    asset      {"patterns": {platform-key: regex}, "hook": PostInstallHook}
    native     {"via": "go" | "npm" | "pip" | "cargo", "deps": [...], "hook": ...,
                "link": False (npm: no bin/<bin> symlink, the hook links)}

Platform keys are ``<os>-<arch>[-<libc>]`` (see detection/platform.py).
"""

from __future__ import annotations

from toolshed.core.services.tool_install.execution.hooks import (
    DecompressBinary,
    ExtractAndLink,
    ExtractBinary,
    ExtractNestedBinary,
    ExtractVersionedDir,
    ExtractWithLauncher,
    LinkExtraBinaries,
    RawBinary,
)

TOOL_CATALOG: dict[str, dict] = {

    # ── Go tools ────────────────────────────────────────────────

    "gopls": {
        "repo": "https://github.com/golang/tools",
        "module": "golang.org/x/tools/gopls",
        "native": {"via": "go"},
    },
    "goimports": {
        "repo": "https://github.com/golang/tools",
        "module": "golang.org/x/tools/cmd/goimports",
        "native": {"via": "go"},
    },
    "lazygit": {
        "repo": "https://github.com/jesseduffield/lazygit",
        "module": "github.com/jesseduffield/lazygit",
        "native": {"via": "go"},
    },
    "actionlint": {
        "repo": "https://github.com/rhysd/actionlint",
        "module": "github.com/rhysd/actionlint/cmd/actionlint",
        "native": {"via": "go"},
    },

    # ── npm tools ───────────────────────────────────────────────

    "typescript-language-server": {
        "repo": "https://github.com/typescript-language-server/typescript-language-server",
        "native": {"via": "npm", "deps": ["typescript"]},
    },
    "pyright": {
        "repo": "https://github.com/microsoft/pyright",
        "native": {"via": "npm"},
    },
    "bash-language-server": {
        "repo": "https://github.com/bash-lsp/bash-language-server",
        "native": {"via": "npm"},
    },
    "vscode-langservers-extracted": {
        "repo": "https://github.com/hrsh7th/vscode-langservers-extracted",
        "native": {
            "via": "npm",
            "link": False,
            "hook": LinkExtraBinaries(
                binaries=(
                    "vscode-css-language-server",
                    "vscode-html-language-server",
                    "vscode-json-language-server",
                    "vscode-markdown-language-server",
                ),
            ),
        },
    },

    # ── pip tools ───────────────────────────────────────────────

    "pylsp": {
        "repo": "https://github.com/python-lsp/python-lsp-server",
        "module": "python-lsp-server",
        "native": {"via": "pip"},
    },

    # ── Release assets with cargo fallback ──────────────────────

    "bat": {
        "repo": "https://github.com/sharkdp/bat",
        "asset": {
            "patterns": {
                "linux-x86_64-musl": r"^bat-.*-x86_64-unknown-linux-musl\.tar\.gz$",
                "linux-x86_64": r"^bat-.*-x86_64-unknown-linux-gnu\.tar\.gz$",
                "linux-aarch64": r"^bat-.*-aarch64-unknown-linux-gnu\.tar\.gz$",
                "darwin-x86_64": r"^bat-.*-x86_64-apple-darwin\.tar\.gz$",
                "darwin-aarch64": r"^bat-.*-aarch64-apple-darwin\.tar\.gz$",
            },
            "hook": ExtractNestedBinary(),
        },
        "native": {"via": "cargo"},
    },
    "fd": {
        "repo": "https://github.com/sharkdp/fd",
        "module": "fd-find",
        "asset": {
            "patterns": {
                "linux-x86_64-musl": r"^fd-.*-x86_64-unknown-linux-musl\.tar\.gz$",
                "linux-x86_64": r"^fd-.*-x86_64-unknown-linux-gnu\.tar\.gz$",
                "linux-aarch64": r"^fd-.*-aarch64-unknown-linux-gnu\.tar\.gz$",
                "darwin-x86_64": r"^fd-.*-x86_64-apple-darwin\.tar\.gz$",
                "darwin-aarch64": r"^fd-.*-aarch64-apple-darwin\.tar\.gz$",
            },
            "hook": ExtractNestedBinary(),
        },
        "native": {"via": "cargo"},
    },
    "just": {
        "repo": "https://github.com/casey/just",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^just-.*-x86_64-unknown-linux-musl\.tar\.gz$",
                "linux-aarch64": r"^just-.*-aarch64-unknown-linux-musl\.tar\.gz$",
                "darwin-x86_64": r"^just-.*-x86_64-apple-darwin\.tar\.gz$",
                "darwin-aarch64": r"^just-.*-aarch64-apple-darwin\.tar\.gz$",
            },
            "hook": ExtractBinary(),
        },
        "native": {"via": "cargo"},
    },
    "exa": {
        "repo": "https://github.com/ogham/exa",
        "asset": {
            "patterns": {
                "linux-x86_64-musl": r"^exa-linux-x86_64-musl-.*\.zip$",
                "linux-x86_64": r"^exa-linux-x86_64-v.*\.zip$",
                "darwin-x86_64": r"^exa-macos-x86_64-.*\.zip$",
            },
            "hook": ExtractBinary(subpath="bin"),
        },
        "native": {"via": "cargo"},
    },
    "nushell": {
        "repo": "https://github.com/nushell/nushell",
        "module": "nu",
        "bin": "nu",
        "asset": {
            "patterns": {
                "linux-x86_64-musl": r"^nu-.*-x86_64-unknown-linux-musl\.tar\.gz$",
                "linux-x86_64": r"^nu-.*-x86_64-unknown-linux-gnu\.tar\.gz$",
                "linux-aarch64": r"^nu-.*-aarch64-unknown-linux-gnu\.tar\.gz$",
                "darwin-x86_64": r"^nu-.*-x86_64-apple-darwin\.tar\.gz$",
                "darwin-aarch64": r"^nu-.*-aarch64-apple-darwin\.tar\.gz$",
            },
            "hook": ExtractNestedBinary(),
        },
        "native": {"via": "cargo"},
    },

    # ── Release assets only ─────────────────────────────────────

    "rust-analyzer": {
        "repo": "https://github.com/rust-lang/rust-analyzer",
        "asset": {
            "patterns": {
                "linux-x86_64-musl": r"^rust-analyzer-x86_64-unknown-linux-musl\.gz$",
                "linux-x86_64": r"^rust-analyzer-x86_64-unknown-linux-gnu\.gz$",
                "linux-aarch64": r"^rust-analyzer-aarch64-unknown-linux-gnu\.gz$",
                "darwin-x86_64": r"^rust-analyzer-x86_64-apple-darwin\.gz$",
                "darwin-aarch64": r"^rust-analyzer-aarch64-apple-darwin\.gz$",
            },
            "hook": DecompressBinary(),
        },
    },
    "clojure-lsp": {
        "repo": "https://github.com/clojure-lsp/clojure-lsp",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^clojure-lsp-native-linux-amd64\.zip$",
                "linux-aarch64": r"^clojure-lsp-native-linux-aarch64\.zip$",
                "darwin-x86_64": r"^clojure-lsp-native-macos-amd64\.zip$",
                "darwin-aarch64": r"^clojure-lsp-native-macos-aarch64\.zip$",
            },
            "hook": ExtractAndLink(),
        },
    },
    "elixir-ls": {
        "repo": "https://github.com/elixir-lsp/elixir-ls",
        "asset": {
            "patterns": {
                "linux": r"^elixir-ls-v.*\.zip$",
                "darwin": r"^elixir-ls-v.*\.zip$",
            },
            "hook": ExtractAndLink(executable="language_server.sh"),
        },
    },
    "direnv": {
        "repo": "https://github.com/direnv/direnv",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^direnv\.linux-amd64$",
                "linux-aarch64": r"^direnv\.linux-arm64$",
                "darwin-x86_64": r"^direnv\.darwin-amd64$",
                "darwin-aarch64": r"^direnv\.darwin-arm64$",
            },
            "hook": RawBinary(),
        },
    },
    "broot": {
        "repo": "https://github.com/Canop/broot",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^broot-x86_64-unknown-linux-musl-.*\.zip$",
                "linux-aarch64": r"^broot-aarch64-unknown-linux-musl-.*\.zip$",
            },
            "hook": ExtractBinary(),
        },
    },
    "lua-language-server": {
        "repo": "https://github.com/LuaLS/lua-language-server",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^lua-language-server-.*-linux-x64\.tar\.gz$",
                "linux-aarch64": r"^lua-language-server-.*-linux-arm64\.tar\.gz$",
                "darwin-x86_64": r"^lua-language-server-.*-darwin-x64\.tar\.gz$",
                "darwin-aarch64": r"^lua-language-server-.*-darwin-arm64\.tar\.gz$",
            },
            "hook": ExtractWithLauncher(executable="bin/lua-language-server"),
        },
    },
    "ltex-ls": {
        "repo": "https://github.com/valentjn/ltex-ls",
        "asset": {
            "patterns": {
                "linux-x86_64": r"^ltex-ls-.*-linux-x64\.tar\.gz$",
                "darwin-x86_64": r"^ltex-ls-.*-mac-x64\.tar\.gz$",
            },
            "hook": ExtractVersionedDir(),
        },
    },
}
