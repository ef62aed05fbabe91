"""Exceptions raised by the policy builder."""

from __future__ import annotations


class CSPError(Exception):
    """Base class for csp_builder errors."""


class InvalidStateError(CSPError):
    """A directive was declared on a policy that is already compiled."""


class UnknownDirectiveError(CSPError, ValueError):
    """Directive name is not part of the catalogue."""


class InvalidValueError(CSPError, ValueError):
    """Directive values are missing, unexpected, or of the wrong type."""


class InvalidPresetError(CSPError, ValueError):
    """Presets file is not valid YAML or does not match the preset schema."""


class UnknownPresetError(CSPError, LookupError):
    """Preset name is not configured."""
