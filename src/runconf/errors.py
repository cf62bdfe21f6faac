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
Exception hierarchy for runconf.

Every error raised by the parsers, decoder and reconciler derives from
RunConfigError. None of them derive from ValueError, so they propagate
through pydantic validators untouched instead of being folded into a
ValidationError.
"""


class RunConfigError(Exception):
    """
    Base exception for all runconf errors.

    These are deterministic input-validation failures; callers format
    the message and map it to an exit code.
    """


class ShapeError(RunConfigError):
    """
    A scalar-or-list field was neither a string nor a list of strings.
    """


class InvalidMountError(RunConfigError):
    """
    Malformed or unsafe volume token.

    Examples:
        - wrong number of colon-delimited segments
        - empty host or container path
        - container path that is the filesystem root or relative
        - unrecognized mode keyword
    """


class InvalidAttachError(RunConfigError):
    """Attach selector other than stdin, stdout or stderr."""


class ConflictingFlagsError(RunConfigError):
    """Mutually exclusive flags were supplied together."""


class SchemaError(RunConfigError):
    """
    A config document is missing a required field or holds a field of
    the wrong primitive kind.
    """


class InvalidLinkError(RunConfigError):
    """Link token that is not `name` or `name:alias`."""


class InvalidPortError(RunConfigError):
    """Port or publish spec that cannot be normalized."""


class InvalidEnvError(RunConfigError):
    """Environment token with an empty variable name."""


class InvalidSizeError(RunConfigError):
    """Byte size that is neither a count nor a recognized human size."""
