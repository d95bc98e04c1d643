# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import headerauth
from headerauth.__main__ import main


def test_version() -> None:
    """Test that version is defined."""
    assert headerauth.__version__ == "0.1.0"


def test_exports() -> None:
    """Test that main exports are available."""
    assert hasattr(headerauth, "bearer_handler")
    assert hasattr(headerauth, "basic_handler")
    assert headerauth.BEARER_TOKEN == "BearerToken"
    assert headerauth.BASIC_TOKEN == "BasicToken"


def test_cli_version(capsys) -> None:
    assert main(["--version"]) == 0
    assert "headerauth 0.1.0" in capsys.readouterr().out


def test_cli_unknown_subcommand(capsys) -> None:
    assert main(["run"]) == 1
    assert "unknown subcommand" in capsys.readouterr().err
