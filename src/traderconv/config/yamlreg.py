# -*- coding: utf-8 -*-
"""YAML registry for the traderconv.config package."""

from ruamel import yaml

YAML = yaml.YAML()
# Retain the declared field order in mappings.
YAML.representer.sort_base_mapping_type_on_output = False
