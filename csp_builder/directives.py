"""Directive catalogue: the closed set of CSP directives the builder knows."""

from __future__ import annotations

from enum import Enum

from csp_builder.errors import UnknownDirectiveError

HEADER = "Content-Security-Policy"
HEADER_REPORT_ONLY = "Content-Security-Policy-Report-Only"

# Fetch directives are declared by base name and rendered as "<base>-src".
FETCH_DIRECTIVES: tuple[str, ...] = (
    "child",
    "connect",
    "default",
    "font",
    "frame",
    "img",
    "manifest",
    "media",
    "object",
    "script",
    "style",
    "worker",
)

VALUE_DIRECTIVES: tuple[str, ...] = (
    "base-uri",
    "form-action",
    "frame-ancestors",
    "plugin-types",
    "report-uri",
    "require-sri-for",
)

# Boolean directives, rendered as the bare name.
META_DIRECTIVES: tuple[str, ...] = (
    "block-all-mixed-content",
    "upgrade-insecure-requests",
)


class DirectiveKind(str, Enum):
    FETCH = "fetch"
    VALUE = "value"
    META = "meta"


class Directive(str, Enum):
    """One member per known directive; the value is the header key."""

    CHILD_SRC = "child-src"
    CONNECT_SRC = "connect-src"
    DEFAULT_SRC = "default-src"
    FONT_SRC = "font-src"
    FRAME_SRC = "frame-src"
    IMG_SRC = "img-src"
    MANIFEST_SRC = "manifest-src"
    MEDIA_SRC = "media-src"
    OBJECT_SRC = "object-src"
    SCRIPT_SRC = "script-src"
    STYLE_SRC = "style-src"
    WORKER_SRC = "worker-src"

    BASE_URI = "base-uri"
    FORM_ACTION = "form-action"
    FRAME_ANCESTORS = "frame-ancestors"
    PLUGIN_TYPES = "plugin-types"
    REPORT_URI = "report-uri"
    REQUIRE_SRI_FOR = "require-sri-for"

    BLOCK_ALL_MIXED_CONTENT = "block-all-mixed-content"
    UPGRADE_INSECURE_REQUESTS = "upgrade-insecure-requests"

    def __str__(self) -> str:
        return self.value

    @property
    def kind(self) -> DirectiveKind:
        return _KINDS[self.value]

    @property
    def attribute(self) -> str:
        """Name of the matching ``Policy`` method, e.g. ``script_src``."""
        return self.value.replace("-", "_")

    @property
    def takes_values(self) -> bool:
        return self.kind is not DirectiveKind.META

    @classmethod
    def lookup(cls, name: Directive | str) -> Directive:
        """Resolve a directive from a member, header key or method name.

        >>> Directive.lookup("script_src") is Directive.SCRIPT_SRC
        True
        """
        if isinstance(name, Directive):
            return name
        if not isinstance(name, str):
            raise UnknownDirectiveError(f"directive name must be a string, got {type(name).__name__}")
        key = name.strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            raise UnknownDirectiveError(f"unknown CSP directive: {name!r}") from None


_KINDS: dict[str, DirectiveKind] = {}
_KINDS.update((f"{base}-src", DirectiveKind.FETCH) for base in FETCH_DIRECTIVES)
_KINDS.update((name, DirectiveKind.VALUE) for name in VALUE_DIRECTIVES)
_KINDS.update((name, DirectiveKind.META) for name in META_DIRECTIVES)


def fetch_directive(base: str) -> Directive:
    """Map a fetch base name (``"script"``) to its ``-src`` directive."""
    if base not in FETCH_DIRECTIVES:
        raise UnknownDirectiveError(f"unknown fetch directive: {base!r}")
    return Directive(f"{base}-src")


def header_name(report_only: bool = False) -> str:
    return HEADER_REPORT_ONLY if report_only else HEADER
