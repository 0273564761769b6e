"""Taxes configuration: country name to marginal-rate schedule.

A configuration file looks like::

    {
      "country_map": {
        "New Zealand": {
          "knots": [
            {"marginal_rate": 0.105, "income_limit": 15600},
            {"marginal_rate": 0.39, "income_limit": null}
          ]
        }
      }
    }

A null (or missing) income limit marks the unbounded top bracket. A bare list
of knots is accepted in place of the ``{"knots": [...]}`` object.
"""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from taxcompare.engines.brackets import COUNTRY_BRACKETS
from taxcompare.engines.marginal_schedule import MarginalRateSchedule
from taxcompare.exceptions import ConfigError, UnknownCountryError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "TAXCOMPARE_CONFIG_PATH"


class TaxesConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_map: dict[str, MarginalRateSchedule]

    @classmethod
    def from_file(cls, path: Path) -> "TaxesConfig":
        try:
            # parse_float keeps rates such as 0.105 exact
            data = json.loads(Path(path).read_text(), parse_float=Decimal)
        except OSError as exc:
            raise ConfigError(str(path), f"cannot read file: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(str(path), f"invalid JSON: {exc}") from exc
        try:
            config = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(path), str(exc)) from exc
        logger.info("Loaded tax schedules for %d countries from %s", len(config.country_map), path)
        return config

    @classmethod
    def default(cls) -> "TaxesConfig":
        """Configuration built from the bundled bracket tables."""
        return cls(
            country_map={
                country: MarginalRateSchedule.from_brackets(brackets)
                for country, brackets in COUNTRY_BRACKETS.items()
            }
        )

    @property
    def countries(self) -> list[str]:
        return list(self.country_map)

    def get_country(self, country: str) -> MarginalRateSchedule:
        try:
            return self.country_map[country]
        except KeyError:
            raise UnknownCountryError(country) from None


def load_taxes_config(path: Path | None = None) -> TaxesConfig:
    """Load from ``path``, else $TAXCOMPARE_CONFIG_PATH, else the bundled tables."""
    if path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            path = Path(env_path)
    if path is None:
        logger.debug("No taxes config supplied, using bundled brackets")
        return TaxesConfig.default()
    return TaxesConfig.from_file(path)
