"""Tests for artifact generation (modularizer.scaffolder.generator).

Covers:
- Pure rendering of the service, model and index files
- ModuleGenerator writing files and delegating to the Angular CLI
- Per-artifact failures being reported without raising
"""

from __future__ import annotations

import re
from unittest.mock import patch

import pytest

from modularizer.config import ModularizerConfig
from modularizer.scaffolder.generator import (
    ModuleGenerator,
    build_context,
    render_index,
    render_model,
    render_service,
)
from modularizer.scaffolder.models import ArtifactKind, ModuleIdentifier
from modularizer.scaffolder.structure import create_directory_structure
from modularizer.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Pure rendering
# ---------------------------------------------------------------------------


class TestBuildContext:
    @pytest.mark.unit
    def test_context_keys(self, user_profile_identifier):
        assert build_context(user_profile_identifier) == {
            "module_name": "user-profile",
            "camel_name": "userProfile",
            "pascal_name": "UserProfile",
        }


class TestRenderModel:
    @pytest.mark.unit
    def test_user_profile_interfaces(self):
        content = render_model(ModuleIdentifier.from_input("user-profile"))
        for name in (
            "UserProfile",
            "UserProfileCreateRequest",
            "UserProfileUpdateRequest",
            "UserProfileResponse",
            "UserProfileListResponse",
        ):
            assert f"export interface {name} {{" in content
        assert "export enum UserProfileStatus {" in content

    @pytest.mark.unit
    def test_status_members(self, order_identifier):
        content = render_model(order_identifier)
        assert "ACTIVE = 'active'" in content
        assert "INACTIVE = 'inactive'" in content
        assert "PENDING = 'pending'" in content

    @pytest.mark.unit
    def test_entity_fields(self, order_identifier):
        content = render_model(order_identifier)
        entity = content.split("export interface Order {", 1)[1].split("}", 1)[0]
        assert "id: string;" in entity
        assert "createdAt: Date;" in entity
        assert "updatedAt: Date;" in entity

    @pytest.mark.unit
    def test_list_response_shape(self, order_identifier):
        content = render_model(order_identifier)
        body = content.split("export interface OrderListResponse {", 1)[1].split("}", 1)[0]
        assert "data: Order[];" in body
        assert "total: number;" in body
        assert "page: number;" in body
        assert "limit: number;" in body
        assert "message?: string;" in body

    @pytest.mark.unit
    def test_deterministic(self, order_identifier):
        assert render_model(order_identifier) == render_model(order_identifier)


class TestRenderService:
    @pytest.mark.unit
    def test_class_and_api_url(self, order_identifier):
        content = render_service(order_identifier)
        assert "export class OrderService {" in content
        assert "private readonly apiUrl = '/api/order';" in content
        assert "providedIn: 'root'" in content

    @pytest.mark.unit
    def test_list_operation_pagination_defaults(self, order_identifier):
        content = render_service(order_identifier)
        assert (
            "getAll(page: number = 1, limit: number = 10): Observable<OrderListResponse>"
            in content
        )
        assert "`${this.apiUrl}?page=${page}&limit=${limit}`" in content

    @pytest.mark.unit
    def test_operations_map_to_http_verbs(self, order_identifier):
        content = render_service(order_identifier)
        verbs = dict(re.findall(r"\n  (\w+)\([^)]*\)[^{]*\{\n    return this\.http\.(\w+)", content))
        assert verbs == {
            "getAll": "get",
            "getById": "get",
            "create": "post",
            "update": "put",
            "delete": "delete",
        }

    @pytest.mark.unit
    def test_request_and_response_types(self, order_identifier):
        content = render_service(order_identifier)
        assert "create(data: OrderCreateRequest): Observable<OrderResponse>" in content
        assert "update(id: string, data: OrderUpdateRequest): Observable<OrderResponse>" in content
        assert "delete(id: string): Observable<void>" in content
        assert "} from '../models';" in content

    @pytest.mark.unit
    def test_multi_word_module(self, user_profile_identifier):
        content = render_service(user_profile_identifier)
        assert "export class UserProfileService {" in content
        assert "'/api/user-profile'" in content


class TestRenderIndex:
    @pytest.mark.unit
    def test_reexports_model(self, user_profile_identifier):
        assert render_index(user_profile_identifier) == "export * from './user-profile.model';\n"


# ---------------------------------------------------------------------------
# ModuleGenerator
# ---------------------------------------------------------------------------


@pytest.fixture
async def created_layout(order_layout):
    await create_directory_structure(order_layout)
    return order_layout


class TestModuleGenerator:
    @pytest.mark.unit
    async def test_models_written(self, config, created_layout, fake_runner):
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        result = await gen.generate(ArtifactKind.MODELS)

        assert result.success is True
        assert result.paths == [created_layout.model_file, created_layout.models_index_file]
        assert "export interface Order {" in created_layout.model_file.read_text(encoding="utf-8")
        assert created_layout.models_index_file.read_text(encoding="utf-8") == (
            "export * from './order.model';\n"
        )
        assert fake_runner.calls == []

    @pytest.mark.unit
    async def test_models_overwrite_existing_files(self, config, created_layout, fake_runner):
        created_layout.model_file.write_text("// hand edited", encoding="utf-8")
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        await gen.generate(ArtifactKind.MODELS)
        assert "hand edited" not in created_layout.model_file.read_text(encoding="utf-8")

    @pytest.mark.unit
    async def test_service_runs_ng_then_writes_template(self, config, created_layout, fake_runner):
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        result = await gen.generate(ArtifactKind.SERVICE)

        assert result.success is True
        command, cwd = fake_runner.calls[0]
        assert command == [
            "ng", "generate", "service", "order/services/order", "--skip-tests=true"
        ]
        assert cwd == created_layout.project_root
        assert "export class OrderService" in created_layout.service_file.read_text(encoding="utf-8")

    @pytest.mark.unit
    async def test_service_without_cli(self, created_layout, fake_runner):
        config = ModularizerConfig(show_banner=False, service_via_cli=False)
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        result = await gen.generate(ArtifactKind.SERVICE)
        assert result.success is True
        assert fake_runner.calls == []
        assert created_layout.service_file.exists()

    @pytest.mark.unit
    async def test_service_cli_failure_skips_template(self, config, created_layout, runner_factory):
        runner = runner_factory(failures={"service": 1})
        gen = ModuleGenerator(config, created_layout, runner=runner)
        result = await gen.generate(ArtifactKind.SERVICE)
        assert result.success is False
        assert "exit code 1" in result.error
        assert not created_layout.service_file.exists()

    @pytest.mark.unit
    async def test_guard_and_layout_delegate(self, config, created_layout, fake_runner):
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        guard = await gen.generate(ArtifactKind.GUARD)
        layout = await gen.generate(ArtifactKind.LAYOUT)

        assert guard.success and layout.success
        assert guard.paths == [created_layout.services_dir / "order.guard.ts"]
        assert layout.paths == [created_layout.layouts_dir / "order.layout.ts"]
        assert fake_runner.schematics == ["guard", "component"]
        assert "--type=layout" in fake_runner.calls[1][0]

    @pytest.mark.unit
    async def test_guard_failure_is_reported_not_raised(
        self, config, created_layout, runner_factory, capsys
    ):
        runner = runner_factory(failures={"guard": 1})
        gen = ModuleGenerator(config, created_layout, runner=runner)
        result = await gen.generate(ArtifactKind.GUARD)

        assert result.success is False
        assert result.kind is ArtifactKind.GUARD
        assert result.error.startswith("Guard: Command failed")
        assert "Error generating guard" in capsys.readouterr().out

    @pytest.mark.unit
    async def test_io_error_is_reported_not_raised(self, config, created_layout, fake_runner):
        gen = ModuleGenerator(config, created_layout, runner=fake_runner)
        with patch(
            "modularizer.scaffolder.generator.write_text",
            side_effect=PermissionError("denied"),
        ):
            result = await gen.generate(ArtifactKind.MODELS)
        assert result.success is False
        assert "denied" in result.error

    @pytest.mark.unit
    async def test_writes_what_the_configured_renderer_produces(
        self, config, created_layout, fake_runner, tmp_path
    ):
        templates = tmp_path / "custom-templates"
        templates.mkdir()
        (templates / "model.ts.j2").write_text("// model {{ pascal_name }}\n", encoding="utf-8")
        (templates / "index.ts.j2").write_text("// index {{ module_name }}\n", encoding="utf-8")

        gen = ModuleGenerator(
            config, created_layout, runner=fake_runner, renderer=TemplateRenderer(templates)
        )
        result = await gen.generate(ArtifactKind.MODELS)

        assert result.success is True
        assert created_layout.model_file.read_text(encoding="utf-8") == "// model Order\n"
        assert created_layout.models_index_file.read_text(encoding="utf-8") == "// index order\n"

    @pytest.mark.unit
    async def test_default_runner_uses_config_timeout(self, created_layout):
        config = ModularizerConfig(tool_timeout=12)
        gen = ModuleGenerator(config, created_layout)
        assert gen.runner.timeout_seconds == 12
