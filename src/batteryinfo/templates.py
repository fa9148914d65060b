"""Label templates and the provider protocol used to look them up.

Templates are ``str.format`` patterns that may reference ``{percentage}``,
``{time}`` and ``{status}``. Selection happens in the builder; this module
only stores and fills them.
"""

from __future__ import annotations

import logging
import string
from enum import Enum
from typing import Any, Final, Mapping, Protocol, runtime_checkable

from batteryinfo.errors import MissingTemplateError

logger: Final = logging.getLogger(__name__)


class TemplateKey(str, Enum):
    """Identifiers for every label template the builder can select."""

    BATTERY_FULL = "battery_full"
    STATUS_CHARGING = "status_charging"
    STATUS_CHARGING_DURATION = "status_charging_duration"
    STATUS_DISCHARGING = "status_discharging"
    STATUS_NOT_CHARGING = "status_not_charging"
    STATUS_UNKNOWN = "status_unknown"
    CHARGING_LOWER = "charging_lower"
    CHARGING = "charging"
    CHARGING_DURATION = "charging_duration"
    CHARGING_DURATION_SHORT = "charging_duration_short"
    DISCHARGING_DURATION = "discharging_duration"
    DISCHARGING_DURATION_SHORT = "discharging_duration_short"
    DISCHARGING_DURATION_ENHANCED = "discharging_duration_enhanced"
    REMAINING_DURATION_ONLY = "remaining_duration_only"
    REMAINING_DURATION_ONLY_SHORT = "remaining_duration_only_short"
    REMAINING_DURATION_ONLY_ENHANCED = "remaining_duration_only_enhanced"
    REMAINING_DURATION_ONLY_SHORT_ENHANCED = "remaining_duration_only_short_enhanced"


ENHANCED_KEYS: Final = frozenset(
    {
        TemplateKey.DISCHARGING_DURATION_ENHANCED,
        TemplateKey.REMAINING_DURATION_ONLY_ENHANCED,
        TemplateKey.REMAINING_DURATION_ONLY_SHORT_ENHANCED,
    }
)

DEFAULT_TEMPLATES: Final[dict[TemplateKey, str]] = {
    TemplateKey.BATTERY_FULL: "Full",
    TemplateKey.STATUS_CHARGING: "Charging",
    TemplateKey.STATUS_CHARGING_DURATION: "Charging - {time} left",
    TemplateKey.STATUS_DISCHARGING: "Discharging",
    TemplateKey.STATUS_NOT_CHARGING: "Not charging",
    TemplateKey.STATUS_UNKNOWN: "Unknown",
    TemplateKey.CHARGING_LOWER: "charging",
    TemplateKey.CHARGING: "{percentage} - {status}",
    TemplateKey.CHARGING_DURATION: "{percentage} - {time} until fully charged",
    TemplateKey.CHARGING_DURATION_SHORT: "{percentage} - {time} left",
    TemplateKey.DISCHARGING_DURATION: "{percentage} - about {time} left",
    TemplateKey.DISCHARGING_DURATION_SHORT: "{percentage} - {time} left",
    TemplateKey.DISCHARGING_DURATION_ENHANCED: (
        "{percentage} - about {time} left based on your usage"
    ),
    TemplateKey.REMAINING_DURATION_ONLY: "About {time} left",
    TemplateKey.REMAINING_DURATION_ONLY_SHORT: "{time} left",
    TemplateKey.REMAINING_DURATION_ONLY_ENHANCED: "About {time} left based on your usage",
    TemplateKey.REMAINING_DURATION_ONLY_SHORT_ENHANCED: "{time} left based on your usage",
}


_NO_FIELDS: Final[frozenset[str]] = frozenset()
_TIME: Final = frozenset({"time"})
_PERCENTAGE_TIME: Final = frozenset({"percentage", "time"})

# Placeholders the builder supplies for each key
TEMPLATE_FIELDS: Final[dict[TemplateKey, frozenset[str]]] = {
    TemplateKey.BATTERY_FULL: _NO_FIELDS,
    TemplateKey.STATUS_CHARGING: _NO_FIELDS,
    TemplateKey.STATUS_CHARGING_DURATION: _TIME,
    TemplateKey.STATUS_DISCHARGING: _NO_FIELDS,
    TemplateKey.STATUS_NOT_CHARGING: _NO_FIELDS,
    TemplateKey.STATUS_UNKNOWN: _NO_FIELDS,
    TemplateKey.CHARGING_LOWER: _NO_FIELDS,
    TemplateKey.CHARGING: frozenset({"percentage", "status"}),
    TemplateKey.CHARGING_DURATION: _PERCENTAGE_TIME,
    TemplateKey.CHARGING_DURATION_SHORT: _PERCENTAGE_TIME,
    TemplateKey.DISCHARGING_DURATION: _PERCENTAGE_TIME,
    TemplateKey.DISCHARGING_DURATION_SHORT: _PERCENTAGE_TIME,
    TemplateKey.DISCHARGING_DURATION_ENHANCED: _PERCENTAGE_TIME,
    TemplateKey.REMAINING_DURATION_ONLY: _TIME,
    TemplateKey.REMAINING_DURATION_ONLY_SHORT: _TIME,
    TemplateKey.REMAINING_DURATION_ONLY_ENHANCED: _TIME,
    TemplateKey.REMAINING_DURATION_ONLY_SHORT_ENHANCED: _TIME,
}


def _field_names(pattern: str) -> list[str]:
    names: list[str] = []
    for _, field_name, format_spec, conversion in string.Formatter().parse(pattern):
        if field_name is None:
            continue
        if conversion not in (None, "r", "s", "a"):
            raise ValueError(f"invalid conversion '!{conversion}'")
        names.append(field_name)
        if format_spec:
            names.extend(_field_names(format_spec))
    return names


def check_template(key: TemplateKey, pattern: str) -> None:
    """Ensure a pattern only uses the placeholders supplied for its key.

    Args:
        key: Template identifier
        pattern: ``str.format`` pattern

    Raises:
        ValueError: If braces are malformed or a placeholder is not
            supplied for ``key``
    """
    try:
        names = _field_names(pattern)
    except ValueError as exc:
        raise ValueError(f"{key.value}: malformed template {pattern!r}: {exc}") from exc

    allowed = TEMPLATE_FIELDS[key]
    for name in names:
        if name not in allowed:
            supported = ", ".join(sorted(allowed)) or "none"
            raise ValueError(
                f"{key.value}: unsupported placeholder {{{name}}} (supported: {supported})"
            )

    try:
        pattern.format(**{name: "" for name in allowed})
    except ValueError as exc:
        raise ValueError(f"{key.value}: invalid template {pattern!r}: {exc}") from exc


@runtime_checkable
class StringTemplateProvider(Protocol):
    """Protocol for label template lookups."""

    def get_string(self, key: TemplateKey, **values: Any) -> str:
        """Return the template for ``key`` filled with ``values``.

        Args:
            key: Template identifier
            **values: Placeholder values (percentage, time, status)

        Returns:
            Filled label text

        Raises:
            MissingTemplateError: If no template exists for ``key``
        """
        ...


class TemplateCatalog:
    """In-memory template provider backed by a key/pattern mapping.

    Examples:
        catalog = TemplateCatalog()
        catalog.get_string(TemplateKey.STATUS_CHARGING_DURATION, time="2h")
        # "Charging - 2h left"

        # Without usage-based phrasing; the builder falls back to plain text
        plain = TemplateCatalog.without_enhanced()
    """

    def __init__(
        self,
        templates: Mapping[TemplateKey, str] | None = None,
        overrides: Mapping[TemplateKey, str] | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            templates: Base templates (default: DEFAULT_TEMPLATES)
            overrides: Templates replacing or adding to the base set

        Raises:
            ValueError: If a pattern uses a placeholder its key never receives
        """
        self._templates: dict[TemplateKey, str] = dict(
            DEFAULT_TEMPLATES if templates is None else templates
        )
        if overrides:
            self._templates.update(overrides)
        for key, pattern in self._templates.items():
            check_template(key, pattern)

    @classmethod
    def without_enhanced(cls) -> TemplateCatalog:
        """Create a catalog that carries no usage-based templates."""
        return cls(
            {k: v for k, v in DEFAULT_TEMPLATES.items() if k not in ENHANCED_KEYS}
        )

    def has(self, key: TemplateKey) -> bool:
        return key in self._templates

    def items(self) -> list[tuple[TemplateKey, str]]:
        """Return templates in declaration order of TemplateKey."""
        return [(key, self._templates[key]) for key in TemplateKey if key in self._templates]

    def get_string(self, key: TemplateKey, **values: Any) -> str:
        try:
            pattern = self._templates[key]
        except KeyError:
            raise MissingTemplateError(key.value) from None
        return pattern.format(**values)
