import pytest

from vuelocalizer.core.accumulator import TranslationAccumulator
from vuelocalizer.core.keys import key_for
from vuelocalizer.core.localizers import (
    AttributeLocalizer,
    InterpolationLocalizer,
    iter_string_literals,
    split_binding,
)


@pytest.fixture
def acc():
    return TranslationAccumulator()


def call(text: str) -> str:
    return f"$t('{key_for(text)}')"


def test_iter_string_literals_handles_quotes_and_escapes():
    literals = list(iter_string_literals("a ? 'x\\'y' : \"z\" + `w`"))
    assert [lit.quote for lit in literals] == ["'", '"', '`']
    assert [lit.body for lit in literals] == ["x\\'y", "z", "w"]


def test_iter_string_literals_stops_on_unterminated():
    literals = list(iter_string_literals("'ok' + 'broken"))
    assert [lit.body for lit in literals] == ["ok"]


@pytest.mark.parametrize("name,expected", [
    ("title", ("", "title")),
    (":title", (":", "title")),
    ("v-bind:placeholder", ("v-bind:", "placeholder")),
    ("@click", ("", "@click")),
])
def test_split_binding(name, expected):
    assert split_binding(name) == expected


def test_ternary_only_chinese_literal_replaced(acc):
    loc = InterpolationLocalizer(acc)
    out = loc.localize("isActive ? '已激活' : 'inactive'")
    assert out == f"isActive ? {call('已激活')} : 'inactive'"
    assert acc.source == {key_for("已激活"): "已激活"}


def test_multiple_literals_and_quote_styles(acc):
    loc = InterpolationLocalizer(acc)
    out = loc.localize("ok ? \"成功\" : `失败` + suffix")
    assert out == f"ok ? {call('成功')} : {call('失败')} + suffix"
    assert len(acc) == 2


def test_template_literal_with_substitution_is_kept(acc):
    loc = InterpolationLocalizer(acc)
    expr = "`共${total}条`"
    assert loc.localize(expr) == expr
    assert len(acc) == 0


def test_expression_without_chinese_unchanged(acc):
    loc = InterpolationLocalizer(acc)
    expr = "  user.name || 'guest'  "
    assert loc.localize(expr) == expr
    assert len(acc) == 0


def test_plain_attribute_gets_bound(acc):
    loc = AttributeLocalizer(acc)
    out = loc.localize({"title": "提交"})
    assert out == {":title": call("提交")}
    assert acc.source[key_for("提交")] == "提交"
    assert acc.target[key_for("提交")] == "提交"


def test_bound_attribute_marker_not_doubled(acc):
    loc = AttributeLocalizer(acc)
    assert loc.localize({":placeholder": "请输入"}) == {":placeholder": call("请输入")}
    assert loc.localize({"v-bind:title": "标题"}) == {"v-bind:title": call("标题")}


def test_bound_expression_only_literals_replaced(acc):
    loc = AttributeLocalizer(acc)
    out = loc.localize({":title": "editing ? '编辑' : 'Create'"})
    assert out == {":title": f"editing ? {call('编辑')} : 'Create'"}


def test_attribute_order_and_other_attributes_kept(acc):
    loc = AttributeLocalizer(acc)
    attrs = {"class": "btn", "title": "删除", "alt": "图片", "placeholder": "search"}
    out = loc.localize(attrs)
    assert list(out) == ["class", ":title", "alt", "placeholder"]
    assert out["alt"] == "图片"
    assert out["placeholder"] == "search"


def test_existing_bound_twin_is_left_alone(acc):
    loc = AttributeLocalizer(acc)
    out = loc.localize({"title": "提示", ":title": "tip"})
    assert out == {"title": "提示", ":title": "tip"}


def test_custom_attribute_names(acc):
    loc = AttributeLocalizer(acc, attribute_names=["label"])
    out = loc.localize({"label": "姓名", "title": "标题"})
    assert out == {":label": call("姓名"), "title": "标题"}
