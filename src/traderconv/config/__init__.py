# -*- coding: utf-8 -*-
"""Configuration of the conversions.

Every value has a default that matches what TraderPlus expects, so a
configuration file is only needed to override some of them. The file is YAML,
for example::

    !ConversionConfig
    default_trader_class: SurvivorF_Eva
    output: !OutputLayout
      root_dir: ServerProfile/TraderPlusConfig

``traderconv defaultconfig`` writes a file with all the defaults.
"""

import argparse
import dataclasses
import pathlib
import textwrap
from typing import IO, Any, ClassVar, Optional

from ruamel.yaml import error as yamlerror

from traderconv import errors, yamlutil
from traderconv.config import yamlreg


@dataclasses.dataclass
@yamlreg.YAML.register_class
class OutputLayout(yamlutil.YamlMappingMixin):
    """Paths of the files in the converted output."""

    yaml_tag: ClassVar = "!OutputLayout"
    root_dir: str = "TraderPlusConfig"
    data_dir: str = "TraderPlusData"
    categories_dir: str = "Categories"
    products_dir: str = "Products"
    currency_settings_file: str = "TraderPlusCurrencySettings.json"
    general_settings_file: str = "TraderPlusGeneralSettings.json"

    def currency_settings_path(self) -> str:
        """Path of the currency settings file."""
        return str(pathlib.PurePosixPath(self.root_dir, self.currency_settings_file))

    def general_settings_path(self) -> str:
        """Path of the general settings file."""
        return str(pathlib.PurePosixPath(self.root_dir, self.general_settings_file))

    def category_path(self, category_id: str) -> str:
        """Path of the file for the given category."""
        return str(
            pathlib.PurePosixPath(
                self.root_dir, self.data_dir, self.categories_dir, f"{category_id}.json"
            )
        )

    def product_path(self, product_id: str) -> str:
        """Path of the file for the given product."""
        return str(
            pathlib.PurePosixPath(
                self.root_dir, self.data_dir, self.products_dir, f"{product_id}.json"
            )
        )


@dataclasses.dataclass
@yamlreg.YAML.register_class
class ConversionConfig(yamlutil.YamlMappingMixin):
    """Values that conversions put into their output."""

    yaml_tag: ClassVar = "!ConversionConfig"
    currency_settings_version: str = "2.0.0"
    general_settings_version: str = "2.5"
    # serverID of general settings converted from the line-oriented format.
    dsl_server_id: str = "CONVERTED_BY_TRADERPLUS_EDITOR"
    # serverID of general settings converted from the v1 JSON files.
    legacy_server_id: str = "CONVERTED_FROM_V1"
    # Class name of traders, where the input does not name one.
    default_trader_class: str = "SurvivorM_Boris"
    # Currency type of v1 currencies whose type cannot be recognised.
    fallback_currency_type: str = "EUR"
    # Currency type when the v1 general config has no currencies.
    empty_currency_type: str = "USD"
    # Currency type of currencies accepted by v1 traders that cannot be
    # recognised.
    unknown_currency_type: str = "Unknown"
    # maxStock of products that do not state one.
    default_max_stock: int = 100
    output: OutputLayout = dataclasses.field(default_factory=OutputLayout)


def _check_field_types(obj: Any, source: str) -> None:
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        if isinstance(field.type, type) and not isinstance(value, field.type):
            raise errors.ConfigurationError(
                f"{source}: {obj.yaml_tag} field {field.name} should be a "
                f"{field.type.__name__}, but is {type(value).__name__}"
            )
        if isinstance(value, yamlutil.YamlMappingMixin):
            _check_field_types(value, source)


def _describe_loaded(value: Any) -> str:
    # Unregistered tags load as plain containers that keep their tag.
    tag = getattr(getattr(value, "tag", None), "value", None)
    if isinstance(tag, str):
        return tag
    return type(value).__name__


def parse_config(text: str, source: str = "<config>") -> ConversionConfig:
    """Parses a YAML conversion configuration.

    :param text: YAML text.
    :param source: Name of the configuration, for error messages.
    :raises errors.ConfigurationError: If the configuration is invalid.
    :return: Configuration.
    """
    try:
        cfg = yamlreg.YAML.load(text)
    except yamlerror.YAMLError as exc:
        raise errors.ConfigurationError(f"{source}: {exc}") from exc
    if cfg is None:
        return ConversionConfig()
    if not isinstance(cfg, ConversionConfig):
        raise errors.ConfigurationError(
            f"{source}: expected a {ConversionConfig.yaml_tag}, got {_describe_loaded(cfg)}"
        )
    _check_field_types(cfg, source)
    return cfg


def load_config(path: Optional[pathlib.Path]) -> ConversionConfig:
    """Loads the configuration from a YAML file.

    :param path: Path to the file. If None, the default configuration is
    returned.
    :raises errors.ConfigurationError: If the file cannot be read, or is
    invalid.
    :return: Configuration.
    """
    if path is None:
        return ConversionConfig()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise errors.ConfigurationError(f"cannot read configuration: {exc}") from exc
    return parse_config(text, source=str(path))


def dump_config(cfg: ConversionConfig, stream: IO[str]) -> None:
    """Writes the configuration as YAML."""
    yamlreg.YAML.dump(cfg, stream)


def add_config_flag(argparser: argparse.ArgumentParser) -> None:
    """Adds the flag required to call ``config_from_args`` on the parsed args."""
    argparser.add_argument(
        "--config",
        "-c",
        help=textwrap.dedent(
            """
            Path to a YAML conversion configuration, as written by the
            defaultconfig command. Defaults are used for anything it does not
            set, or for everything if this flag is not given.
            """
        ),
        type=pathlib.Path,
        metavar="CONFIG.yaml",
        default=None,
    )


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    """Loads the configuration named by the flag added by ``add_config_flag``."""
    return load_config(args.config)
