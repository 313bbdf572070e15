import pytest

from ackgen.check import check_exception_message, check_required_fields_missing_from_shape
from ackgen.config import ExceptionConfig, ResourceConfig, default_config
from ackgen.resource import Field, GenerationError, Operation, OpType, Resource, Shape


def _string(name="String"):
    return Shape(name=name, type="string")


def _input(name, required):
    return Shape(name=name, type="structure", members={r: _string() for r in required}, required=required)


def test_attributes_arn_field():
    topic = Resource(
        name="Topic",
        ops={
            OpType.GET_ATTRIBUTES: Operation(
                "GetTopicAttributes", _input("GetTopicAttributesInput", ["TopicArn"])
            )
        },
    )
    got = check_required_fields_missing_from_shape(topic, OpType.GET_ATTRIBUTES, "ko", 1)
    assert got.strip() == (
        "return (ko.Status.ACKResourceMetadata == nil || ko.Status.ACKResourceMetadata.ARN == nil)"
    )


def test_attributes_status_field():
    queue = Resource(
        name="Queue",
        ops={
            OpType.GET_ATTRIBUTES: Operation(
                "GetQueueAttributes", _input("GetQueueAttributesInput", ["QueueUrl"])
            )
        },
        status_fields={"QueueUrl": Field("QueueUrl", _string())},
    )
    got = check_required_fields_missing_from_shape(queue, OpType.GET_ATTRIBUTES, "r.ko", 1)
    assert got.strip() == "return r.ko.Status.QueueURL == nil"


def test_status_and_spec_field():
    route = Resource(
        name="Route",
        ops={OpType.GET: Operation("GetRoute", _input("GetRouteRequest", ["ApiId", "RouteId"]))},
        spec_fields={"ApiId": Field("ApiId", _string())},
        status_fields={"RouteId": Field("RouteId", _string())},
    )
    got = check_required_fields_missing_from_shape(route, OpType.GET, "r.ko", 1)
    assert got.strip() == "return r.ko.Spec.APIID == nil || r.ko.Status.RouteID == nil"
    assert got == "\treturn r.ko.Spec.APIID == nil || r.ko.Status.RouteID == nil\n"


def test_renamed_spec_field():
    cfg = default_config()
    cfg.resources["FargateProfile"] = ResourceConfig(
        renames={"DescribeFargateProfile": {"fargateProfileName": "Name"}}
    )
    profile = Resource(
        name="FargateProfile",
        config=cfg,
        ops={
            OpType.GET: Operation(
                "DescribeFargateProfile",
                _input("DescribeFargateProfileRequest", ["clusterName", "fargateProfileName"]),
            )
        },
        spec_fields={
            "clusterName": Field("clusterName", _string()),
            "Name": Field("Name", _string()),
        },
    )
    got = check_required_fields_missing_from_shape(profile, OpType.GET, "r.ko", 1)
    assert got.strip() == "return r.ko.Spec.ClusterName == nil || r.ko.Spec.Name == nil"


def test_no_required_fields_returns_false():
    res = Resource(name="Thing", ops={OpType.GET: Operation("GetThing", _input("In", []))})
    assert check_required_fields_missing_from_shape(res, OpType.GET, "ko", 2) == "\t\treturn false"


def test_missing_input_shape_returns_false():
    res = Resource(name="Thing", ops={OpType.GET: Operation("GetThing", None)})
    assert check_required_fields_missing_from_shape(res, OpType.GET, "ko", 0) == "return false"


def test_unsupported_op_type_returns_empty():
    res = Resource(name="Thing")
    assert check_required_fields_missing_from_shape(res, OpType.CREATE, "ko", 1) == ""


def test_missing_operation_raises():
    res = Resource(name="Thing")
    with pytest.raises(GenerationError):
        check_required_fields_missing_from_shape(res, OpType.GET, "ko", 1)


def test_field_in_neither_spec_nor_status_raises():
    res = Resource(
        name="Thing",
        ops={OpType.GET: Operation("GetThing", _input("GetThingInput", ["Widget"]))},
    )
    with pytest.raises(GenerationError, match="required field Widget in Shape GetThingInput"):
        check_required_fields_missing_from_shape(res, OpType.GET, "ko", 1)


def test_unpacked_attributes_are_skipped():
    cfg = default_config()
    cfg.resources["Queue"] = ResourceConfig(unpack_attributes_map=True)
    queue = Resource(
        name="Queue",
        config=cfg,
        ops={
            OpType.SET_ATTRIBUTES: Operation(
                "SetQueueAttributes",
                _input("SetQueueAttributesInput", ["QueueUrl", "Attributes"]),
            )
        },
        status_fields={"QueueUrl": Field("QueueUrl", _string())},
    )
    got = check_required_fields_missing_from_shape(queue, OpType.SET_ATTRIBUTES, "ko", 1)
    assert got == "\treturn ko.Status.QueueURL == nil\n"


def test_single_attribute_members_are_skipped():
    cfg = default_config()
    cfg.resources["Topic"] = ResourceConfig(
        unpack_attributes_map=True, set_attributes_single_attribute=True
    )
    topic = Resource(
        name="Topic",
        config=cfg,
        ops={
            OpType.SET_ATTRIBUTES: Operation(
                "SetTopicAttributes",
                _input("SetTopicAttributesInput", ["TopicArn", "AttributeName", "AttributeValue"]),
            )
        },
    )
    got = check_required_fields_missing_from_shape(topic, OpType.SET_ATTRIBUTES, "ko", 0)
    assert got == (
        "return (ko.Status.ACKResourceMetadata == nil || ko.Status.ACKResourceMetadata.ARN == nil)\n"
    )


def _with_exceptions(errors):
    cfg = default_config()
    cfg.resources["Model"] = ResourceConfig(exceptions=errors)
    return cfg, Resource(name="Model", config=cfg)


def test_exception_message_prefix():
    cfg, res = _with_exceptions({404: ExceptionConfig(message_prefix="Could not find model")})
    assert check_exception_message(cfg, res, 404) == (
        '&& strings.HasPrefix(awsErr.Message(), "Could not find model") '
    )


def test_exception_message_suffix():
    cfg, res = _with_exceptions({404: ExceptionConfig(message_suffix="does not exist.")})
    assert check_exception_message(cfg, res, 404) == (
        '&& strings.HasSuffix(awsErr.Message(), "does not exist.") '
    )


def test_exception_message_prefix_takes_precedence():
    cfg, res = _with_exceptions(
        {400: ExceptionConfig(message_prefix="start", message_suffix="end")}
    )
    assert "HasPrefix" in check_exception_message(cfg, res, 400)
    assert "HasSuffix" not in check_exception_message(cfg, res, 400)


def test_exception_message_other_status_is_empty():
    cfg, res = _with_exceptions({404: ExceptionConfig(message_prefix="x")})
    assert check_exception_message(cfg, res, 500) == ""


def test_exception_message_unconfigured_resource_is_empty():
    cfg = default_config()
    assert check_exception_message(cfg, Resource(name="Model", config=cfg), 404) == ""


def test_exception_message_code_only_is_empty():
    cfg, res = _with_exceptions({404: ExceptionConfig(code="ResourceNotFound")})
    assert check_exception_message(cfg, res, 404) == ""