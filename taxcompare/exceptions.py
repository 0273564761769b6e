"""Custom exceptions for taxcompare."""

from decimal import Decimal


class TaxComputationError(Exception):
    """Base exception for tax computation errors."""


class NegativeIncomeError(TaxComputationError):
    """Raised when a tax amount is requested for a negative income."""

    def __init__(self, income: Decimal):
        self.income = income
        super().__init__(f"Negative income encountered: {income}")


class IncomeOutOfBoundsError(TaxComputationError):
    """Raised when an income falls outside the range covered by a schedule."""

    def __init__(self, income: Decimal, bounds: tuple[Decimal, Decimal]):
        self.income = income
        self.bounds = bounds
        super().__init__(
            f"Income {income} is out of bounds: [{bounds[0]}, {bounds[1]}]"
        )


class DataValidationError(TaxComputationError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class UnknownCountryError(TaxComputationError):
    """Raised when a country has no configured tax schedule."""

    def __init__(self, country: str):
        self.country = country
        super().__init__(f"No tax schedule configured for country: {country}")


class ExchangeRateError(TaxComputationError):
    """Raised when an exchange rate is missing or unusable."""

    def __init__(self, message: str):
        super().__init__(f"Exchange rate error: {message}")


class ConfigError(TaxComputationError):
    """Raised when a taxes configuration file cannot be loaded."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error for {path}: {message}")
