"""Lockfile parsers — auto-registered on import."""

from lockscan.scanner.parsers import (
    cargo,  # noqa: F401
    cocoapods,  # noqa: F401
    dart,  # noqa: F401
    elixir,  # noqa: F401
    go,  # noqa: F401
    maven,  # noqa: F401
    npm,  # noqa: F401
    nuget,  # noqa: F401
    php,  # noqa: F401
    pip,  # noqa: F401
    ruby,  # noqa: F401
    swift,  # noqa: F401
)
