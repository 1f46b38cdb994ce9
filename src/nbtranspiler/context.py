# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from nbtranspiler.constants import APP_NAME, ENV_APP_PREFIX, LOCAL_CONFIG_FILE
from nbtranspiler.core.config import ConfigLoader, TranspilerConfig


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {key: item for key, item in input_args.items() if item is not None}

    loader = ConfigLoader(
        Path(LOCAL_CONFIG_FILE),
        ENV_APP_PREFIX,
        Path(user_config_dir(APP_NAME)) / LOCAL_CONFIG_FILE,
        custom_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )
    return loader.load(TranspilerConfig, config_args)


@dataclass(frozen=True)
class GlobalContext:
    config: TranspilerConfig


@dataclass(frozen=True)
class TranspileContext:
    source: str
    file: str | None
    output: Path | None = None
    pretty: bool = False
