# -*- coding: utf-8 -*-
"""Renders configurations as files, and writes them out."""

import dataclasses
import logging
import pathlib
from typing import Callable, Mapping, Optional

from traderconv import config, filesio, jsonenc
from traderconv.datatypes import workspace

_LOG = logging.getLogger(__name__)


@dataclasses.dataclass
class Progress:
    """Progress of writing files."""

    completed: int
    total: int


def render_files(
    cfg: workspace.TraderPlusConfig,
    layout: config.OutputLayout,
    codec: jsonenc.Codec = jsonenc.DEFAULT_CODEC,
) -> dict[str, str]:
    """Renders a configuration as JSON files.

    :param cfg: Configuration to render. Settings documents that it does not
    have are not rendered.
    :param layout: Paths of the files.
    :param codec: Encoder of the files.
    :return: Mapping from file path to JSON text. Paths use ``/`` separators.
    Currency settings come first, then general settings, categories and
    products.
    """
    files: dict[str, str] = {}
    if cfg.currency_settings is not None:
        files[layout.currency_settings_path()] = codec.dumps(cfg.currency_settings)
    if cfg.general_settings is not None:
        files[layout.general_settings_path()] = codec.dumps(cfg.general_settings)
    for category in cfg.categories:
        files[layout.category_path(category.category_id)] = codec.dumps(category)
    for product in cfg.products:
        files[layout.product_path(product.product_id)] = codec.dumps(product)
    return files


def write_files(
    writer: filesio.Writer,
    files: Mapping[str, str],
    on_progress: Optional[Callable[[Progress], None]] = None,
) -> None:
    """Writes rendered files.

    :param writer: Destination of the files.
    :param files: Mapping from file path to contents, as from ``render_files``.
    :param on_progress: Called after each file is written.
    """
    total = len(files)
    for i, (path, contents) in enumerate(files.items(), start=1):
        _LOG.debug("writing %s", path)
        with writer.open_write(pathlib.PurePosixPath(path)) as f:
            f.write(contents)
        if on_progress is not None:
            on_progress(Progress(completed=i, total=total))
