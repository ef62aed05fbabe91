"""
csp-builder - fluent Content-Security-Policy header builder
"""

__version__ = "0.1.0"

from csp_builder.directives import (
    HEADER,
    HEADER_REPORT_ONLY,
    Directive,
    DirectiveKind,
    fetch_directive,
    header_name,
)
from csp_builder.errors import (
    CSPError,
    InvalidStateError,
    InvalidValueError,
    InvalidPresetError,
    UnknownDirectiveError,
    UnknownPresetError,
)
from csp_builder.policy import Compiled, NotCompiled, Policy
from csp_builder.values import (
    NONE,
    REPORT_SAMPLE,
    SELF,
    STRICT_DYNAMIC,
    UNSAFE_EVAL,
    UNSAFE_HASHES,
    UNSAFE_INLINE,
    WASM_UNSAFE_EVAL,
    Keyword,
    RawToken,
    hash_source,
    nonce,
    reserved,
)

__all__ = [
    'Policy', 'NotCompiled', 'Compiled',
    'Directive', 'DirectiveKind', 'fetch_directive', 'header_name', 'HEADER', 'HEADER_REPORT_ONLY',
    'Keyword', 'RawToken', 'reserved', 'nonce', 'hash_source',
    'SELF', 'NONE', 'UNSAFE_INLINE', 'UNSAFE_EVAL', 'UNSAFE_HASHES', 'STRICT_DYNAMIC',
    'REPORT_SAMPLE', 'WASM_UNSAFE_EVAL',
    'CSPError', 'InvalidStateError', 'InvalidValueError', 'InvalidPresetError', 'UnknownDirectiveError', 'UnknownPresetError',
]
