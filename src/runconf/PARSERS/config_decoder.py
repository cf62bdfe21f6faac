# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Decoder for serialized container config documents.

Documents written by older releases differ in shape: Entrypoint and Cmd
may be a bare string or a list, and host settings such as Memory may sit
at the top level instead of in a nested HostConfig object. All known
generations decode into the same ContainerConfig / HostConfig pair.
"""
import json
import os
from typing import Any, Dict, Tuple

import yaml
from pydantic import ValidationError

from ..errors import SchemaError
from ..MODELS.container_config import ContainerConfig, HostConfig
from ..UTILS.log import get_logger

logger = get_logger(__name__)

# Host settings that old documents stored on the container config itself,
# mapped to their HostConfig names.
LEGACY_HOST_FIELDS = {
    "Memory": "Memory",
    "MemorySwap": "MemorySwap",
    "CpuShares": "CpuShares",
    "Cpuset": "CpusetCpus",
}

YAML_SUFFIXES = ('.yml', '.yaml')


class ConfigDecoder:
    """
    Decoder for container config documents of any supported generation.
    """
    @staticmethod
    def decode_file(path: str) -> Tuple[ContainerConfig, HostConfig]:
        """
        Decodes a document from a file. YAML files are recognized by their
        extension; everything else is read as JSON.

        :param path: Path to the document.
        :return: (ContainerConfig, HostConfig)
        """
        if path.endswith(YAML_SUFFIXES):
            with open(path, 'r', encoding='utf-8') as f:
                try:
                    document = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise SchemaError(f"Invalid YAML in {os.path.basename(path)}: {e}") from e
            return ConfigDecoder.decode(document)

        with open(path, 'rb') as f:
            return ConfigDecoder.decode(f.read())

    @staticmethod
    def decode(data: Any) -> Tuple[ContainerConfig, HostConfig]:
        """
        Decodes a document.

        :param data: JSON text or bytes, a readable stream, or an already
            parsed mapping.
        :return: (ContainerConfig, HostConfig)
        :raises SchemaError: If the document is malformed or lacks Image.
        :raises ShapeError: If Entrypoint or Cmd has an unsupported shape.
        """
        document = ConfigDecoder._load(data)
        if not isinstance(document, dict):
            raise SchemaError(f"Config document must be an object, got {type(document).__name__}")

        if "Image" not in document or document["Image"] is None:
            raise SchemaError("Config document has no Image")
        if not isinstance(document["Image"], str):
            raise SchemaError(f"Image must be a string, got {type(document['Image']).__name__}")

        try:
            config = ContainerConfig.model_validate(document)
        except ValidationError as e:
            raise SchemaError(f"Invalid container config: {e}") from e

        host = ConfigDecoder._decode_host(document)
        return config, host

    @staticmethod
    def _decode_host(document: Dict[str, Any]) -> HostConfig:
        fields: Dict[str, Any] = {}
        for legacy, name in LEGACY_HOST_FIELDS.items():
            if document.get(legacy) is not None:
                logger.debug("Reading legacy top-level %s into HostConfig.%s", legacy, name)
                fields[name] = document[legacy]

        nested = document.get("HostConfig")
        if nested is not None:
            if not isinstance(nested, dict):
                raise SchemaError(f"HostConfig must be an object, got {type(nested).__name__}")
            fields.update({key: value for key, value in nested.items() if value is not None})

        try:
            return HostConfig.model_validate(fields)
        except ValidationError as e:
            raise SchemaError(f"Invalid host config: {e}") from e

    @staticmethod
    def _load(data: Any) -> Any:
        if isinstance(data, dict):
            return data
        if hasattr(data, 'read'):
            data = data.read()
        if isinstance(data, (bytes, bytearray)):
            try:
                data = data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise SchemaError(f"Config document is not valid UTF-8: {e}") from e
        if not isinstance(data, str):
            raise SchemaError(f"Cannot decode config document from {type(data).__name__}")
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON config document: {e}") from e
