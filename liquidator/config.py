"""Configuration for the fee liquidator.

Two layers:
- ManagerConfig / ConfigurationStore: the mutable runtime configuration a
  FeeManager owns (intermediate assets, slippage, owner).
- LiquidatorSettings: process configuration read from environment
  variables, used to wire a deployment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import structlog

from liquidator.constants import DEFAULT_SLIPPAGE_BPS, SLIPPAGE_SCALE, ZERO_ADDRESS
from liquidator.errors import ConfigurationError
from liquidator.events import ChangedPossiblePaths, OwnershipTransferred, SlippageChanged
from liquidator.models.types import is_valid_address, normalize_address

if TYPE_CHECKING:
    from collections.abc import Iterable

    from liquidator.events import Event

logger = structlog.get_logger()


def validate_slippage(slippage_bps: int) -> int:
    """Validate a slippage tolerance in thousandths.

    Raises:
        ConfigurationError: If the value is not an int in [0, SLIPPAGE_SCALE]
    """
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise ConfigurationError(f"Slippage must be an integer, got {slippage_bps!r}")
    if not 0 <= slippage_bps <= SLIPPAGE_SCALE:
        raise ConfigurationError(f"Slippage {slippage_bps} outside [0, {SLIPPAGE_SCALE}]")
    return slippage_bps


def validate_owner(owner: str) -> str:
    """Normalize an administrator address.

    Raises:
        ConfigurationError: If owner is not a valid address or is the zero address
    """
    owner = normalize_address(owner)
    if not is_valid_address(owner) or owner == ZERO_ADDRESS:
        raise ConfigurationError(f"Invalid owner address: {owner}")
    return owner


@dataclass(frozen=True)
class ManagerConfig:
    """Runtime configuration of a fee manager.

    Attributes:
        owner: Administrator allowed to call gated operations
        intermediate_assets: Candidate hop assets, in priority order (first match wins)
        slippage_bps: Fraction of the quoted output (in thousandths) a swap must return
    """

    owner: str
    intermediate_assets: tuple[str, ...] = ()
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS


class ConfigurationStore:
    """Holds the ManagerConfig and applies replacements to it.

    The store does no authorization itself; the FeeManager that owns it
    checks the caller first. Each mutator returns the event describing the
    change so the owner can emit it inside its own atomic block.
    """

    def __init__(self, config: ManagerConfig) -> None:
        validate_slippage(config.slippage_bps)
        self._config = replace(
            config,
            intermediate_assets=tuple(normalize_address(a) for a in config.intermediate_assets),
            owner=validate_owner(config.owner),
        )

    @property
    def config(self) -> ManagerConfig:
        return self._config

    @property
    def intermediate_assets(self) -> tuple[str, ...]:
        return self._config.intermediate_assets

    @property
    def slippage_bps(self) -> int:
        return self._config.slippage_bps

    @property
    def owner(self) -> str:
        return self._config.owner

    def set_intermediate_assets(self, assets: Iterable[str]) -> Event:
        """Replace the whole intermediate-asset list.

        Contents are not validated: duplicates and the zero address can only
        fail to match during route resolution.
        """
        paths = tuple(normalize_address(a) for a in assets)
        self._config = replace(self._config, intermediate_assets=paths)
        logger.debug("intermediate_assets_set", count=len(paths))
        return ChangedPossiblePaths(paths=paths)

    def set_slippage(self, slippage_bps: int) -> Event:
        """Replace the slippage tolerance.

        Raises:
            ConfigurationError: If slippage_bps is outside [0, 1000]
        """
        validate_slippage(slippage_bps)
        previous = self._config.slippage_bps
        self._config = replace(self._config, slippage_bps=slippage_bps)
        logger.debug("slippage_set", previous=previous, current=slippage_bps)
        return SlippageChanged(previous=previous, current=slippage_bps)

    def set_owner(self, new_owner: str) -> Event:
        """Hand administration to another account.

        Raises:
            ConfigurationError: If new_owner is not a valid address or is zero
        """
        new_owner = validate_owner(new_owner)
        previous = self._config.owner
        self._config = replace(self._config, owner=new_owner)
        return OwnershipTransferred(previous_owner=previous, new_owner=new_owner)


def _parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_int(name: str, default: int) -> int:
    value = os.environ.get(name, str(default))
    try:
        return int(value)
    except ValueError as err:
        raise ConfigurationError(f"Invalid {name}: {value!r} is not an integer") from err


@dataclass(frozen=True)
class LiquidatorSettings:
    """Process-level settings for a deployment.

    Attributes:
        manager_address: Account the fee manager acts as
        owner: Initial administrator
        slippage_bps: Initial slippage tolerance (thousandths)
        intermediate_assets: Initial intermediate-asset list
        host: API bind host
        port: API bind port
        debug: Enable reload and debug logging
    """

    manager_address: str = "0x000000000000000000000000000000000000fee1"
    owner: str = "0x000000000000000000000000000000000000a11c"
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    intermediate_assets: tuple[str, ...] = field(default_factory=tuple)
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @classmethod
    def from_env(cls) -> LiquidatorSettings:
        """Read settings from LIQUIDATOR_* environment variables.

        Raises:
            ConfigurationError: If an address or the slippage value is invalid
        """
        defaults = cls()
        settings = cls(
            manager_address=os.environ.get("LIQUIDATOR_ADDRESS", defaults.manager_address),
            owner=os.environ.get("LIQUIDATOR_OWNER", defaults.owner),
            slippage_bps=_parse_int("LIQUIDATOR_SLIPPAGE_BPS", defaults.slippage_bps),
            intermediate_assets=tuple(
                _parse_csv(os.environ.get("LIQUIDATOR_INTERMEDIATE_ASSETS", ""))
            ),
            host=os.environ.get("LIQUIDATOR_HOST", defaults.host),
            port=_parse_int("LIQUIDATOR_PORT", defaults.port),
            debug=os.environ.get("LIQUIDATOR_DEBUG", "false").lower() in ("true", "1", "yes"),
        )
        for name, address in (
            ("LIQUIDATOR_ADDRESS", settings.manager_address),
            *(("LIQUIDATOR_INTERMEDIATE_ASSETS", a) for a in settings.intermediate_assets),
        ):
            if not is_valid_address(normalize_address(address)):
                raise ConfigurationError(f"Invalid {name} address: {address}")
        validate_owner(settings.owner)
        validate_slippage(settings.slippage_bps)
        return settings

    def manager_config(self) -> ManagerConfig:
        return ManagerConfig(
            intermediate_assets=self.intermediate_assets,
            slippage_bps=self.slippage_bps,
            owner=self.owner,
        )


__all__ = [
    "ManagerConfig",
    "ConfigurationStore",
    "LiquidatorSettings",
    "validate_slippage",
    "validate_owner",
]
