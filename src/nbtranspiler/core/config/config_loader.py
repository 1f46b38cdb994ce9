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

"""
Layered configuration.

Settings are read from several places and merged key by key, the first
layer that sets a key wins:

    1. explicit overrides (command line options)
    2. a custom TOML file, when one is given
    3. the local TOML file in the working directory
    4. prefixed environment variables
    5. the global TOML file in the user config directory
"""

import os
import tomllib
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_toml(path: Path) -> dict:
    """Read a TOML file; a missing or malformed file contributes nothing."""
    if not path.exists():
        logger.debug(f"{path} does not exist")
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Failed to load {path}: {e}")
        return {}


def load_env(prefix: str) -> dict:
    """Collect `<PREFIX>KEY=value` variables as lowercase `key` entries."""
    return {
        key[len(prefix) :].lower(): value
        for key, value in os.environ.items()
        if key.upper().startswith(prefix.upper())
    }


class ConfigLoader:
    def __init__(
        self,
        local_path: Path,
        env_prefix: str,
        global_path: Path,
        custom_path: Path | None = None,
    ):
        self.local_path = local_path
        self.env_prefix = env_prefix
        self.global_path = global_path
        self.custom_path = custom_path

    def layers(self, overrides: dict) -> list[dict]:
        """Every configuration layer, highest priority first."""
        layers = [overrides]
        if self.custom_path is not None:
            if not self.custom_path.exists():
                raise ConfigurationError(
                    f"Custom config not found: {self.custom_path}",
                    "Check the path passed to --custom-config",
                )
            layers.append(load_toml(self.custom_path))
        layers.append(load_toml(self.local_path))
        layers.append(load_env(self.env_prefix))
        layers.append(load_toml(self.global_path))
        return layers

    def load(self, model: type[ModelT], overrides: dict | None = None) -> ModelT:
        """Merge all layers and validate the result as `model`."""
        fields = model.model_fields.keys()
        merged = {}
        for layer in reversed(self.layers(overrides or {})):
            merged.update({k: v for k, v in layer.items() if k in fields})

        logger.debug(f"Merged configuration: {merged}")
        try:
            return model.model_validate(merged)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e
