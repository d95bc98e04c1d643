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

"""Tests for middleware_chain, import strings and AuthConfig."""

import pytest

from headerauth import (
    BEARER_TOKEN,
    AuthConfig,
    AuthenticationError,
    BasicAuthMiddleware,
    BearerAuthMiddleware,
    ConfigError,
    ErrorMiddleware,
    middleware_chain,
)
from headerauth.middleware import MIDDLEWARE_REGISTRY
from headerauth.utils import import_string, resolve_object


class ModuleVerifier:
    """Verifier importable as test_middleware_chain:ModuleVerifier."""

    realm = "configured"

    def parse_and_verify(self, *credentials):
        if credentials[0] != "abc123":
            raise AuthenticationError("nope")
        return "from-config"


async def inner_app(scope, receive, send) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


class TestRegistry:
    """Tests for the middleware registry."""

    def test_registered_names(self) -> None:
        assert MIDDLEWARE_REGISTRY["errors"] is ErrorMiddleware
        assert MIDDLEWARE_REGISTRY["bearer"] is BearerAuthMiddleware
        assert MIDDLEWARE_REGISTRY["basic"] is BasicAuthMiddleware

    def test_order(self) -> None:
        assert ErrorMiddleware.middleware_order < BearerAuthMiddleware.middleware_order
        assert BearerAuthMiddleware.middleware_order < BasicAuthMiddleware.middleware_order


class TestMiddlewareChain:
    """Tests for middleware_chain."""

    def test_defaults_only(self) -> None:
        """Only errors is on by default."""
        app = middleware_chain(None, inner_app)

        assert isinstance(app, ErrorMiddleware)
        assert app.app is inner_app

    def test_bearer_from_dict_config(self) -> None:
        full_config = {"bearer_middleware": {"verifier": ModuleVerifier(), "strict_scheme": True}}
        app = middleware_chain({"bearer": "on"}, inner_app, full_config)

        assert isinstance(app, ErrorMiddleware)
        assert isinstance(app.app, BearerAuthMiddleware)
        assert app.app.strict_scheme is True
        assert app.app.app is inner_app

    def test_import_string_verifier(self) -> None:
        full_config = {"bearer_middleware": {"verifier": "test_middleware_chain:ModuleVerifier"}}
        app = middleware_chain("bearer", inner_app, full_config)

        assert isinstance(app.app.verifier, ModuleVerifier)
        assert app.app.challenge == 'Bearer realm="configured"'

    def test_disable_errors(self) -> None:
        full_config = {"basic_middleware": {"verifier": ModuleVerifier()}}
        app = middleware_chain({"errors": "off", "basic": True}, inner_app, full_config)

        assert isinstance(app, BasicAuthMiddleware)

    def test_enabled_without_verifier(self) -> None:
        with pytest.raises(ConfigError):
            middleware_chain(["bearer"], inner_app, {})

    def test_unknown_middleware(self) -> None:
        with pytest.raises(ConfigError):
            middleware_chain("bearer, jwt", inner_app, {})

    @pytest.mark.asyncio
    async def test_chain_serves_requests(self) -> None:
        full_config = {"bearer_middleware": {"verifier": ModuleVerifier()}}
        app = middleware_chain({"bearer": True}, inner_app, full_config)
        messages: list = []

        async def send(message):
            messages.append(message)

        scope = {"type": "http", "headers": [(b"authorization", b"Bearer abc123")]}
        await app(scope, None, send)
        assert messages[0]["status"] == 200
        assert scope["state"][BEARER_TOKEN] == "from-config"

        messages.clear()
        await app({"type": "http", "headers": []}, None, send)
        assert messages[0]["status"] == 401


class TestImportString:
    """Tests for import_string and resolve_object."""

    def test_import_string(self) -> None:
        assert import_string("headerauth.middleware.errors:ErrorMiddleware") is ErrorMiddleware

    def test_dotted_attribute(self) -> None:
        assert import_string("headerauth:ErrorMiddleware.middleware_name") == "errors"

    @pytest.mark.parametrize(
        "path",
        ["headerauth", "headerauth:", ":ErrorMiddleware", "no_such_module_xyz:x", "headerauth:Missing"],
    )
    def test_invalid(self, path: str) -> None:
        with pytest.raises(ConfigError):
            import_string(path)

    def test_resolve_object(self) -> None:
        verifier = ModuleVerifier()

        assert resolve_object(verifier) is verifier
        assert isinstance(resolve_object(ModuleVerifier), ModuleVerifier)
        assert isinstance(resolve_object("test_middleware_chain:ModuleVerifier"), ModuleVerifier)


class TestAuthConfig:
    """Tests for AuthConfig."""

    def test_missing_explicit_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            AuthConfig(config=tmp_path / "missing.yaml")

    def test_yaml_config(self, tmp_path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "server:\n"
            "  port: 9100\n"
            "  app: \"test_middleware_chain:inner_app\"\n"
            "middleware:\n"
            "  bearer: true\n"
            "bearer_middleware:\n"
            "  verifier: \"test_middleware_chain:ModuleVerifier\"\n"
        )

        config = AuthConfig(config=config_file)
        app = config.build_app()

        assert config.server["port"] == 9100
        assert config.server["host"] == "127.0.0.1"
        assert isinstance(app, ErrorMiddleware)
        assert isinstance(app.app, BearerAuthMiddleware)
        assert app.app.app is inner_app

    def test_explicit_values_win(self, tmp_path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("server:\n  port: 9100\n")

        config = AuthConfig(config=config_file, port=9200)

        assert config.server["port"] == 9200

    def test_build_app_without_app(self, tmp_path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("middleware:\n  errors: true\n")

        with pytest.raises(ConfigError):
            AuthConfig(config=config_file).build_app()
