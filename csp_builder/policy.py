"""Fluent Content-Security-Policy builder.

Directives are declared through one method per known directive (or the
generic ``declare``), accumulate in first-use order, and are rendered once by
``compile``. After that the policy is frozen and further declarations raise
``InvalidStateError``.

Example:
    >>> from csp_builder import Policy, SELF
    >>> Policy().script_src("https://cdn.example.com", SELF).img_src("*").compile()
    "script-src https://cdn.example.com 'self'; img-src *"
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

import structlog

from csp_builder.directives import Directive, DirectiveKind
from csp_builder.errors import InvalidStateError, InvalidValueError
from csp_builder.values import Keyword, RawToken, parse_value, to_value

logger = structlog.get_logger()

SEPARATOR = "; "


@dataclass(frozen=True)
class NotCompiled:
    pass


@dataclass(frozen=True)
class Compiled:
    result: str


PolicyState = Union[NotCompiled, Compiled]


def _valued(directive: Directive) -> Callable[..., Policy]:
    def declare(self: Policy, *values: Keyword | RawToken | str) -> Policy:
        return self.declare(directive, *values)

    declare.__name__ = declare.__qualname__ = directive.attribute
    declare.__doc__ = (
        f"Append values to ``{directive.value}``. Keywords are single-quoted, strings used verbatim."
    )
    return declare


def _meta(directive: Directive) -> Callable[[Policy], Policy]:
    def declare(self: Policy) -> Policy:
        return self.declare(directive)

    declare.__name__ = declare.__qualname__ = directive.attribute
    declare.__doc__ = f"Enable ``{directive.value}``."
    return declare


class Policy:
    """Accumulates directive declarations and renders the CSP header value."""

    def __init__(self) -> None:
        self._directives: dict[Directive, str | bool] = {}
        self._state: PolicyState = NotCompiled()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Policy:
        """Build a policy from ``{directive: values}``.

        Values may be a list, a single value, or ``True`` for meta directives
        (``False`` entries are skipped). Strings use config notation, so
        ``"'self'"`` is a keyword.
        """
        policy = cls()
        for name, values in mapping.items():
            directive = Directive.lookup(name)
            if isinstance(values, bool):
                if not values:
                    continue
                if directive.takes_values:
                    raise InvalidValueError(f"{directive} needs values, got a boolean")
                policy.declare(directive)
                continue
            if isinstance(values, (str, Keyword, RawToken)):
                values = [values]
            elif not isinstance(values, (list, tuple)):
                raise InvalidValueError(
                    f"{directive} values must be a list, a single value or a boolean, got {type(values).__name__}"
                )
            policy.declare(
                directive,
                *(parse_value(v) if isinstance(v, str) else v for v in values),
            )
        return policy

    # ── State ────────────────────────────────────────────────────────────

    @property
    def state(self) -> PolicyState:
        return self._state

    @property
    def compiled(self) -> bool:
        return isinstance(self._state, Compiled)

    @property
    def result(self) -> str | None:
        """Compiled header value, or None before ``compile``."""
        if isinstance(self._state, Compiled):
            return self._state.result
        return None

    @property
    def directives(self) -> Mapping[Directive, str | bool]:
        return MappingProxyType(self._directives)

    # ── Declaration ──────────────────────────────────────────────────────

    def declare(self, directive: Directive | str, *values: Keyword | RawToken | str) -> Policy:
        """Add values (or presence, for meta directives) to a directive."""
        if isinstance(self._state, Compiled):
            logger.warning("policy_mutation_after_compile", directive=str(directive))
            raise InvalidStateError(f"cannot declare {directive} on a compiled policy")

        directive = Directive.lookup(directive)
        if directive.kind is DirectiveKind.META:
            if values:
                raise InvalidValueError(f"{directive} takes no values")
            self._directives[directive] = True
            return self

        if not values:
            raise InvalidValueError(f"{directive} requires at least one value")
        rendered = " ".join(to_value(v).render() for v in values)
        if directive in self._directives:
            rendered = f"{self._directives[directive]} {rendered}"
        self._directives[directive] = rendered
        return self

    child_src = _valued(Directive.CHILD_SRC)
    connect_src = _valued(Directive.CONNECT_SRC)
    default_src = _valued(Directive.DEFAULT_SRC)
    font_src = _valued(Directive.FONT_SRC)
    frame_src = _valued(Directive.FRAME_SRC)
    img_src = _valued(Directive.IMG_SRC)
    manifest_src = _valued(Directive.MANIFEST_SRC)
    media_src = _valued(Directive.MEDIA_SRC)
    object_src = _valued(Directive.OBJECT_SRC)
    script_src = _valued(Directive.SCRIPT_SRC)
    style_src = _valued(Directive.STYLE_SRC)
    worker_src = _valued(Directive.WORKER_SRC)

    base_uri = _valued(Directive.BASE_URI)
    form_action = _valued(Directive.FORM_ACTION)
    frame_ancestors = _valued(Directive.FRAME_ANCESTORS)
    plugin_types = _valued(Directive.PLUGIN_TYPES)
    report_uri = _valued(Directive.REPORT_URI)
    require_sri_for = _valued(Directive.REQUIRE_SRI_FOR)

    block_all_mixed_content = _meta(Directive.BLOCK_ALL_MIXED_CONTENT)
    upgrade_insecure_requests = _meta(Directive.UPGRADE_INSECURE_REQUESTS)

    # ── Compilation ──────────────────────────────────────────────────────

    def compile(self) -> str:
        """Render the header value once, then freeze the policy.

        Later calls return the cached string.
        """
        if isinstance(self._state, Compiled):
            return self._state.result

        parts = []
        for directive, value in self._directives.items():
            if directive.kind is DirectiveKind.META:
                parts.append(directive.value)
            else:
                parts.append(f"{directive.value} {value}")
        result = SEPARATOR.join(parts)

        self._directives = MappingProxyType(dict(self._directives))  # type: ignore[assignment]
        self._state = Compiled(result)
        logger.debug("policy_compiled", directives=len(parts), length=len(result))
        return result

    # ── Copying ──────────────────────────────────────────────────────────

    def copy(self) -> Policy:
        """Return an unfrozen policy with an independent copy of the directives."""
        clone = type(self).__new__(type(self))
        clone._directives = dict(self._directives)
        clone._state = NotCompiled()
        return clone

    def __copy__(self) -> Policy:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Policy:
        return self.copy()

    def __repr__(self) -> str:
        state = "compiled" if self.compiled else "open"
        keys = ", ".join(d.value for d in self._directives)
        return f"<{type(self).__name__} {state} [{keys}]>"
