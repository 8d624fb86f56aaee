"""Workspace settings and settings-driven display formatting.

Every formatter takes the WorkspaceSettings explicitly; nothing here reads
global state, mutates settings or performs I/O. Unsupported configuration
(unknown timezone, date format, currency fields) falls back to defaults
instead of failing the render.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

import pytz

from workforce_billing.calculators.money import DEFAULT_SCALE, clamp_scale, round_money

PLACEHOLDER = "-"

POSITIONS = ("prefix", "suffix")
DATE_FORMATS = {
    "YYYY-MM-DD": "{Y}-{M}-{D}",
    "DD-MM-YYYY": "{D}-{M}-{Y}",
    "MM-DD-YYYY": "{M}-{D}-{Y}",
}
TIME_FORMATS = {
    "24h": "%H:%M",
    "12h": "%I:%M %p",
}
DEFAULT_DATE_FORMAT = "YYYY-MM-DD"
DEFAULT_TIME_FORMAT = "24h"


@dataclass(frozen=True)
class CurrencyOption:
    code: str
    name: str
    symbol: str
    decimals: int
    position: str


CURRENCY_OPTIONS: tuple[CurrencyOption, ...] = (
    CurrencyOption("USD", "US Dollar", "$", 2, "prefix"),
    CurrencyOption("EUR", "Euro", "€", 2, "suffix"),
    CurrencyOption("GBP", "British Pound", "£", 2, "prefix"),
    CurrencyOption("INR", "Indian Rupee", "₹", 2, "prefix"),
    CurrencyOption("AUD", "Australian Dollar", "A$", 2, "prefix"),
    CurrencyOption("CAD", "Canadian Dollar", "C$", 2, "prefix"),
    CurrencyOption("JPY", "Japanese Yen", "¥", 0, "prefix"),
    CurrencyOption("CNY", "Chinese Yuan", "¥", 2, "prefix"),
    CurrencyOption("SGD", "Singapore Dollar", "S$", 2, "prefix"),
    CurrencyOption("AED", "UAE Dirham", "د.إ", 2, "suffix"),
)


def find_currency(code: str | None) -> CurrencyOption | None:
    """Look up a catalog currency by ISO code (case-insensitive)."""
    wanted = (code or "").strip().upper()
    for option in CURRENCY_OPTIONS:
        if option.code == wanted:
            return option
    return None


@dataclass(frozen=True)
class CurrencySettings:
    code: str = "USD"
    symbol: str = "$"
    position: str = "prefix"
    decimals: int = DEFAULT_SCALE

    @classmethod
    def for_code(cls, code: str) -> CurrencySettings:
        """Catalog defaults for a currency code; unknown codes keep the code as symbol."""
        option = find_currency(code)
        if option is None:
            return cls(code=code.upper(), symbol=code.upper())
        return cls(
            code=option.code,
            symbol=option.symbol,
            position=option.position,
            decimals=option.decimals,
        )


@dataclass(frozen=True)
class DateTimeSettings:
    timezone: str = "UTC"
    date_format: str = DEFAULT_DATE_FORMAT
    time_format: str = DEFAULT_TIME_FORMAT


@dataclass(frozen=True)
class WorkspaceSettings:
    """Workspace currency and date/time configuration."""

    currency: CurrencySettings = field(default_factory=CurrencySettings)
    date_time: DateTimeSettings = field(default_factory=DateTimeSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> WorkspaceSettings:
        """Load settings from a stored record, tolerating missing or bad values.

        Accepts both snake_case and the camelCase keys used by stored
        settings documents (dateTime, dateFormat, timeFormat).
        """
        data = data or {}
        currency = _section(data, "currency")
        date_time = _section(data, "date_time", "dateTime")
        return cls(
            currency=_currency_from(currency, CurrencySettings()),
            date_time=_date_time_from(date_time, DateTimeSettings()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"currency": asdict(self.currency), "date_time": asdict(self.date_time)}


DEFAULT_SETTINGS = WorkspaceSettings()


def _section(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    for key in keys:
        value = data.get(key)
        if isinstance(value, Mapping):
            return value
    return {}


def _pick(section: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in section and section[key] not in (None, ""):
            return section[key]
    return None


def _currency_from(section: Mapping[str, Any], base: CurrencySettings) -> CurrencySettings:
    code = _pick(section, "code")
    symbol = _pick(section, "symbol")
    position = _pick(section, "position")
    decimals = _pick(section, "decimals")
    return replace(
        base,
        code=str(code).strip() if code is not None else base.code,
        symbol=str(symbol).strip() if symbol is not None else base.symbol,
        position=position if position in POSITIONS else base.position,
        decimals=clamp_scale(decimals) if decimals is not None else base.decimals,
    )


def _date_time_from(section: Mapping[str, Any], base: DateTimeSettings) -> DateTimeSettings:
    timezone = _pick(section, "timezone")
    date_format = _pick(section, "date_format", "dateFormat")
    time_format = _pick(section, "time_format", "timeFormat")
    return replace(
        base,
        timezone=str(timezone).strip() if timezone is not None else base.timezone,
        date_format=date_format if date_format in DATE_FORMATS else base.date_format,
        time_format=time_format if time_format in TIME_FORMATS else base.time_format,
    )


def merge_settings(
    base: WorkspaceSettings, override: Mapping[str, Any] | None
) -> WorkspaceSettings:
    """Overlay a partial settings record onto base, section by section.

    Returns a new object; base is left untouched.
    """
    override = override or {}
    return WorkspaceSettings(
        currency=_currency_from(_section(override, "currency"), base.currency),
        date_time=_date_time_from(_section(override, "date_time", "dateTime"), base.date_time),
    )


def resolve_timezone(name: Any) -> pytz.BaseTzInfo:
    """Resolve an IANA timezone name, falling back to UTC."""
    if not isinstance(name, str) or not name.strip():
        return pytz.UTC
    try:
        return pytz.timezone(name.strip())
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def is_valid_timezone(name: Any) -> bool:
    if not isinstance(name, str) or not name.strip():
        return False
    try:
        pytz.timezone(name.strip())
    except pytz.UnknownTimeZoneError:
        return False
    return True


def _parse_amount(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def _parse_moment(value: Any) -> date | datetime | None:
    """Parse a date, datetime or ISO string. Naive datetimes are UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else pytz.UTC.localize(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return moment if moment.tzinfo else pytz.UTC.localize(moment)


def _localize(moment: date | datetime, settings: WorkspaceSettings) -> date | datetime:
    if isinstance(moment, datetime):
        return moment.astimezone(resolve_timezone(settings.date_time.timezone))
    return moment


def local_date(moment: date | datetime, timezone: Any = "UTC") -> date:
    """Calendar date of a moment in a timezone.

    Naive datetimes are read as UTC; plain dates are returned unchanged.
    """
    if isinstance(moment, datetime):
        aware = moment if moment.tzinfo else pytz.UTC.localize(moment)
        return aware.astimezone(resolve_timezone(timezone)).date()
    return moment


def format_number(value: Any, max_decimals: int = 2) -> str:
    """Group thousands and keep up to max_decimals, trimming trailing zeros."""
    amount = _parse_amount(value)
    if amount is None:
        return PLACEHOLDER
    scale = clamp_scale(max_decimals)
    text = f"{round_money(amount, scale):,.{scale}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_money(amount: Any, settings: WorkspaceSettings = DEFAULT_SETTINGS) -> str:
    """Render an amount with the workspace currency symbol and decimals."""
    value = _parse_amount(amount)
    if value is None:
        return PLACEHOLDER

    currency = settings.currency
    decimals = clamp_scale(currency.decimals)
    number = f"{round_money(value, decimals):,.{decimals}f}"
    symbol = currency.symbol or currency.code
    if not symbol:
        return number
    if currency.position == "suffix":
        return f"{number} {symbol}"
    return f"{symbol} {number}"


def format_date(value: Any, settings: WorkspaceSettings = DEFAULT_SETTINGS) -> str:
    """Render a date in the workspace timezone and date layout.

    Plain calendar dates are rendered as-is; datetimes are converted to the
    workspace timezone first.
    """
    moment = _parse_moment(value)
    if moment is None:
        return PLACEHOLDER
    local = _localize(moment, settings)
    layout = DATE_FORMATS.get(settings.date_time.date_format, DATE_FORMATS[DEFAULT_DATE_FORMAT])
    return layout.format(Y=f"{local.year:04d}", M=f"{local.month:02d}", D=f"{local.day:02d}")


def format_time(value: Any, settings: WorkspaceSettings = DEFAULT_SETTINGS) -> str:
    """Render a clock time in the workspace timezone, 12h or 24h."""
    moment = _parse_moment(value)
    if moment is None:
        return PLACEHOLDER
    if isinstance(moment, datetime):
        local = _localize(moment, settings)
    else:
        local = datetime(moment.year, moment.month, moment.day)
    pattern = TIME_FORMATS.get(settings.date_time.time_format, TIME_FORMATS[DEFAULT_TIME_FORMAT])
    return local.strftime(pattern)


def format_datetime(value: Any, settings: WorkspaceSettings = DEFAULT_SETTINGS) -> str:
    if _parse_moment(value) is None:
        return PLACEHOLDER
    return f"{format_date(value, settings)} {format_time(value, settings)}"
