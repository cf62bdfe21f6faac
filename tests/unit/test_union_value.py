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
Unit tests for scalar-or-list values.
"""
import json

import pytest

from runconf.errors import ShapeError
from runconf.MODELS.container_config import ContainerConfig
from runconf.MODELS.union_value import Command, Entrypoint, UnionValue


class TestUnionValue:
    """Tests for UnionValue decoding and encoding."""

    def test_decode_string(self):
        """A bare string decodes to a one-element sequence."""
        e = Entrypoint.decode(json.loads(json.dumps("echo")))
        assert e.slice() == ["echo"]
        assert len(e) == 1

    def test_decode_list(self):
        """A list decodes element by element."""
        c = Command.decode(json.loads(json.dumps(["echo"])))
        assert c.slice() == ["echo"]

    def test_scalar_equals_single_element_list(self):
        assert Command.decode("echo") == Command.decode(["echo"])

    @pytest.mark.parametrize("parts", [[], ["bash"], ["sh", "-c", "echo hi"], ["", " "]])
    def test_round_trip(self, parts):
        """Decoding the encoded form gives back the same sequence."""
        value = Entrypoint.decode(parts)
        assert Entrypoint.decode(value.encode()) == value
        assert value.encode() == parts

    def test_encode_is_always_list(self):
        assert Command.decode("ls").encode() == ["ls"]

    def test_is_empty(self):
        assert Command.decode([]).is_empty()
        assert not Command.decode("ls").is_empty()

    def test_slice_is_a_copy(self):
        value = Command("a", "b")
        parts = value.slice()
        parts.append("c")
        assert value.slice() == ["a", "b"]

    @pytest.mark.parametrize("raw", [1, 1.5, True, {"a": "b"}, [["nested"]], ["ok", 2], None])
    def test_decode_rejects_other_shapes(self, raw):
        with pytest.raises(ShapeError):
            UnionValue.decode(raw)

    def test_repr(self):
        assert repr(Entrypoint("bash")) == "Entrypoint(['bash'])"


class TestUnionValueInModels:
    """Tests for UnionValue as a model field type."""

    def test_model_accepts_both_shapes(self):
        config = ContainerConfig.model_validate({"Image": "ubuntu", "Entrypoint": "bash", "Cmd": ["-c", "ls"]})
        assert isinstance(config.entrypoint, Entrypoint)
        assert config.entrypoint.slice() == ["bash"]
        assert config.cmd.slice() == ["-c", "ls"]

    def test_absent_is_none(self):
        config = ContainerConfig.model_validate({"Image": "ubuntu", "Entrypoint": None})
        assert config.entrypoint is None
        assert config.cmd is None

    def test_model_serializes_list_form(self):
        config = ContainerConfig(image="ubuntu", entrypoint=Entrypoint.decode("bash"))
        dumped = config.model_dump(by_alias=True, mode="json")
        assert dumped["Entrypoint"] == ["bash"]
        assert dumped["Cmd"] is None

    def test_bad_shape_is_not_wrapped(self):
        """ShapeError passes through pydantic validation unchanged."""
        with pytest.raises(ShapeError):
            ContainerConfig.model_validate({"Image": "ubuntu", "Cmd": 42})
