import pytest

from ackgen.config import GeneratorConfig, HookConfig, ResourceConfig, default_config
from ackgen.hook import HookError, resource_hook_code
from ackgen.resource import Resource

INLINE = "if err := rm.requeueIfNotRunning(latest); err != nil { return nil, err }"


def _broker(hooks):
    cfg = default_config()
    cfg.resources["Broker"] = ResourceConfig(hooks=hooks)
    return Resource(name="Broker", config=cfg)


@pytest.fixture
def broker():
    return _broker(
        {
            "sdk_update_pre_build_request": HookConfig(code=INLINE),
            "sdk_delete_pre_build_request": HookConfig(
                template_path="sdk_delete_pre_build_request.go.tpl"
            ),
        }
    )


@pytest.fixture
def templates(tmp_path):
    base = tmp_path / "templates"
    base.mkdir()
    (base / "sdk_delete_pre_build_request.go.tpl").write_text("// this is my template.\n")
    return base


def test_inline_code(broker):
    assert resource_hook_code([], broker, "sdk_update_pre_build_request", None, None) == INLINE


def test_template_path(broker, templates):
    got = resource_hook_code([templates], broker, "sdk_delete_pre_build_request", None, None)
    assert got == "// this is my template.\n"


def test_config_from_dict_inline():
    cfg = GeneratorConfig.from_dict(
        {"resources": {"Broker": {"hooks": {"sdk_create_post_request": {"code": "x := 1"}}}}}
    )
    res = Resource(name="Broker", config=cfg)
    assert resource_hook_code([], res, "sdk_create_post_request") == "x := 1"


def test_unconfigured_hook_returns_empty(broker):
    assert resource_hook_code([], broker, "delta_pre_compare") == ""


def test_empty_hook_id_returns_empty(broker):
    assert resource_hook_code([], broker, "") == ""


def test_unknown_resource_returns_empty():
    res = Resource(name="Queue")
    assert resource_hook_code([], res, "sdk_update_pre_build_request") == ""


def test_hook_without_code_or_template():
    res = _broker({"sdk_create_pre_build_request": HookConfig()})
    with pytest.raises(HookError, match="Need either code or template_path"):
        resource_hook_code([], res, "sdk_create_pre_build_request")


def test_template_not_found(broker, tmp_path):
    with pytest.raises(HookError, match="not found"):
        resource_hook_code([tmp_path], broker, "sdk_delete_pre_build_request")


def test_first_matching_base_path_wins(broker, tmp_path, templates):
    override = tmp_path / "override"
    override.mkdir()
    (override / "sdk_delete_pre_build_request.go.tpl").write_text("// override\n")
    got = resource_hook_code([override, templates], broker, "sdk_delete_pre_build_request")
    assert got == "// override\n"


def test_missing_base_path_is_skipped(broker, tmp_path, templates):
    got = resource_hook_code(
        [tmp_path / "absent", templates], broker, "sdk_delete_pre_build_request"
    )
    assert got == "// this is my template.\n"


def test_template_renders_variables_and_filters(tmp_path):
    (tmp_path / "hook.tpl").write_text("// {{ name | shout }}\n")
    res = _broker({"sdk_read_one_post_request": HookConfig(template_path="hook.tpl")})
    got = resource_hook_code(
        [tmp_path], res, "sdk_read_one_post_request", {"name": "broker"}, {"shout": str.upper}
    )
    assert got == "// BROKER\n"


def test_template_parse_error(tmp_path):
    (tmp_path / "bad.tpl").write_text("{% if %}")
    res = _broker({"sdk_read_one_post_request": HookConfig(template_path="bad.tpl")})
    with pytest.raises(HookError, match="error parsing"):
        resource_hook_code([tmp_path], res, "sdk_read_one_post_request")


def test_template_execute_error(tmp_path):
    (tmp_path / "undef.tpl").write_text("{{ missing.value }}")
    res = _broker({"sdk_read_one_post_request": HookConfig(template_path="undef.tpl")})
    with pytest.raises(HookError, match="error executing"):
        resource_hook_code([tmp_path], res, "sdk_read_one_post_request")