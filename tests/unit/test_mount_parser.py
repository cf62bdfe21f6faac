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
Unit tests for the volume token parser.
"""
import pytest

from runconf.errors import InvalidMountError
from runconf.MODELS.mount_spec import AccessMode, BindMount, LabelMode, NamedVolume
from runconf.PARSERS.mount_parser import MountParser


class TestMountParser:
    """Tests for MountParser.parse."""

    def test_named_volume(self):
        mount = MountParser.parse("/tmp")
        assert mount == NamedVolume(container_path="/tmp")

    def test_bind_mount(self):
        mount = MountParser.parse("/hostTmp:/containerTmp")
        assert isinstance(mount, BindMount)
        assert mount.host_path == "/hostTmp"
        assert mount.container_path == "/containerTmp"
        assert mount.mode is None
        assert not mount.read_only
        assert mount.literal == "/hostTmp:/containerTmp"

    def test_bind_mount_read_only(self):
        mount = MountParser.parse("/tmp:/tmp:ro")
        assert isinstance(mount, BindMount)
        assert mount.mode.access == AccessMode.READ_ONLY
        assert mount.mode.label == LabelMode.UNLABELED
        assert mount.read_only
        assert mount.literal == "/tmp:/tmp:ro"

    @pytest.mark.parametrize("mode,access,label", [
        ("rw", AccessMode.READ_WRITE, LabelMode.UNLABELED),
        ("Z", AccessMode.READ_WRITE, LabelMode.RELABEL_PRIVATE),
        ("z", AccessMode.READ_WRITE, LabelMode.RELABEL_SHARED),
        ("roZ", AccessMode.READ_ONLY, LabelMode.RELABEL_PRIVATE),
        ("rwZ", AccessMode.READ_WRITE, LabelMode.RELABEL_PRIVATE),
        ("roz", AccessMode.READ_ONLY, LabelMode.RELABEL_SHARED),
    ])
    def test_modes(self, mode, access, label):
        mount = MountParser.parse(f"/host:/container:{mode}")
        assert mount.mode.access == access
        assert mount.mode.label == label
        assert mount.literal == f"/host:/container:{mode}"

    @pytest.mark.parametrize("token", [
        "",
        "/",
        "//",
        "/.",
        ":",
        "::",
        "/tmp:",
        "/tmp::",
        ":/tmp",
        "/x:/",
        "/:/",
        "/tmp:ro",
        "relative",
        "/tmp:/tmp:bogus",
        "/tmp:/tmp:",
        "/tmp:/tmp:ZZ",
        "/a:/b:\n",
        "/a:/b:ro\n",
        "/tmp:/tmp:/tmp:/tmp",
        "a:b:c:d:e",
    ])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidMountError):
            MountParser.parse(token)

    def test_two_segments_with_mode_keyword_is_host_container(self):
        """'/tmp:/ro' is a bind of /tmp onto /ro, never a mode."""
        mount = MountParser.parse("/tmp:/ro")
        assert isinstance(mount, BindMount)
        assert mount.container_path == "/ro"
        assert mount.mode is None

    def test_relative_host_path_allowed(self):
        mount = MountParser.parse("data:/data")
        assert mount.host_path == "data"

    def test_non_string_token(self):
        with pytest.raises(InvalidMountError):
            MountParser.parse(None)
