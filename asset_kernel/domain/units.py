"""Units -- measurement unit and currency registries for number formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from asset_kernel.domain.attributes import AnyAttribute


@dataclass(frozen=True)
class MeasurementUnit:
    """One unit within a measurement category."""

    value: str
    label: str
    symbol: str


@dataclass(frozen=True)
class MeasurementCategoryInfo:
    """A measurement category and the units it offers."""

    value: str
    label: str
    units: tuple[MeasurementUnit, ...]

    def get_unit(self, unit_value: str) -> MeasurementUnit | None:
        for unit in self.units:
            if unit.value == unit_value:
                return unit
        return None


@dataclass(frozen=True)
class CurrencyOption:
    """A currency offered for currency-formatted numbers."""

    code: str
    label: str
    symbol: str


def _units(*rows: tuple[str, str, str]) -> tuple[MeasurementUnit, ...]:
    return tuple(MeasurementUnit(v, label, symbol) for v, label, symbol in rows)


class UnitRegistry:
    """Registry of measurement categories and currencies."""

    _CATEGORIES: ClassVar[dict[str, MeasurementCategoryInfo]] = {
        "length": MeasurementCategoryInfo("length", "Length", _units(
            ("mm", "Millimeters", "mm"),
            ("cm", "Centimeters", "cm"),
            ("m", "Meters", "m"),
            ("km", "Kilometers", "km"),
            ("in", "Inches", "in"),
            ("ft", "Feet", "ft"),
            ("yd", "Yards", "yd"),
            ("mi", "Miles", "mi"),
        )),
        "weight": MeasurementCategoryInfo("weight", "Weight", _units(
            ("g", "Grams", "g"),
            ("kg", "Kilograms", "kg"),
            ("oz", "Ounces", "oz"),
            ("lb", "Pounds", "lb"),
            ("ton", "Metric tons", "t"),
        )),
        "volume": MeasurementCategoryInfo("volume", "Volume", _units(
            ("ml", "Milliliters", "ml"),
            ("l", "Liters", "L"),
            ("m3", "Cubic meters", "m³"),
            ("gal", "Gallons", "gal"),
            ("floz", "Fluid ounces", "fl oz"),
        )),
        "area": MeasurementCategoryInfo("area", "Area", _units(
            ("m2", "Square meters", "m²"),
            ("km2", "Square kilometers", "km²"),
            ("ft2", "Square feet", "ft²"),
            ("acre", "Acres", "ac"),
            ("ha", "Hectares", "ha"),
        )),
        "temperature": MeasurementCategoryInfo("temperature", "Temperature", _units(
            ("c", "Celsius", "°C"),
            ("f", "Fahrenheit", "°F"),
            ("k", "Kelvin", "K"),
        )),
        "time": MeasurementCategoryInfo("time", "Time / Duration", _units(
            ("sec", "Seconds", "s"),
            ("min", "Minutes", "min"),
            ("hr", "Hours", "hr"),
            ("day", "Days", "days"),
            ("wk", "Weeks", "wks"),
            ("mo", "Months", "mo"),
            ("yr", "Years", "yrs"),
        )),
        "speed": MeasurementCategoryInfo("speed", "Speed", _units(
            ("ms", "Meters per second", "m/s"),
            ("kmh", "Kilometers per hour", "km/h"),
            ("mph", "Miles per hour", "mph"),
        )),
        "pressure": MeasurementCategoryInfo("pressure", "Pressure", _units(
            ("psi", "PSI", "psi"),
            ("bar", "Bar", "bar"),
            ("kpa", "Kilopascals", "kPa"),
            ("pa", "Pascals", "Pa"),
        )),
        "power": MeasurementCategoryInfo("power", "Power", _units(
            ("w", "Watts", "W"),
            ("kw", "Kilowatts", "kW"),
            ("hp", "Horsepower", "HP"),
        )),
    }

    _CURRENCIES: ClassVar[dict[str, CurrencyOption]] = {
        c.code: c
        for c in (
            CurrencyOption("GBP", "British Pound", "£"),
            CurrencyOption("USD", "US Dollar", "$"),
            CurrencyOption("EUR", "Euro", "€"),
            CurrencyOption("AUD", "Australian Dollar", "A$"),
            CurrencyOption("CAD", "Canadian Dollar", "C$"),
            CurrencyOption("NZD", "New Zealand Dollar", "NZ$"),
            CurrencyOption("CHF", "Swiss Franc", "CHF"),
            CurrencyOption("JPY", "Japanese Yen", "¥"),
            CurrencyOption("CNY", "Chinese Yuan", "¥"),
            CurrencyOption("INR", "Indian Rupee", "₹"),
            CurrencyOption("SGD", "Singapore Dollar", "S$"),
            CurrencyOption("HKD", "Hong Kong Dollar", "HK$"),
            CurrencyOption("ZAR", "South African Rand", "R"),
            CurrencyOption("AED", "UAE Dirham", "د.إ"),
            CurrencyOption("SEK", "Swedish Krona", "kr"),
            CurrencyOption("NOK", "Norwegian Krone", "kr"),
            CurrencyOption("DKK", "Danish Krone", "kr"),
        )
    }

    @classmethod
    def categories(cls) -> tuple[MeasurementCategoryInfo, ...]:
        return tuple(cls._CATEGORIES.values())

    @classmethod
    def get_category(cls, category: str) -> MeasurementCategoryInfo | None:
        return cls._CATEGORIES.get(category)

    @classmethod
    def get_measurement_unit(cls, category: str, unit_value: str) -> MeasurementUnit | None:
        """Look up a unit by measurement category and unit value."""
        info = cls._CATEGORIES.get(category)
        return info.get_unit(unit_value) if info else None

    @classmethod
    def get_currency(cls, code: str) -> CurrencyOption | None:
        return cls._CURRENCIES.get(code.upper().strip()) if code else None

    @classmethod
    def currencies(cls) -> tuple[CurrencyOption, ...]:
        return tuple(cls._CURRENCIES.values())


def resolve_units(attribute: AnyAttribute) -> str | None:
    """Units label a form field shows next to its input.

    An explicit ``units`` wins, then the measurement unit symbol, then the
    currency symbol, then the free-text ``suffix``.  Unknown measurement
    units and currencies fall through to the next source.
    """
    if attribute.units:
        return attribute.units
    if attribute.measurement_config is not None:
        unit = UnitRegistry.get_measurement_unit(
            attribute.measurement_config.category,
            attribute.measurement_config.unit,
        )
        if unit is not None:
            return unit.symbol
    if attribute.currency_config is not None:
        currency = UnitRegistry.get_currency(attribute.currency_config.currency)
        if currency is not None:
            return currency.symbol
    return attribute.suffix or None
