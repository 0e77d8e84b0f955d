import pytest

from vuelocalizer.core.exceptions import SegmentParseError
from vuelocalizer.core.sfc_parser import parse_block_attrs, parse_component

SAMPLE = """<!-- header comment -->
<template>
  <div>
    <template v-if="ok"><span>是</span></template>
    <p>否</p>
  </div>
</template>

<script>
export default { name: 'Demo' }
</script>

<style scoped>
.a { color: red; }
</style>
<style lang="scss">
.b { .c { margin: 0; } }
</style>
"""


def test_blocks_are_split():
    d = parse_component(SAMPLE, "Demo.vue")
    assert d.filename == "Demo.vue"
    assert d.template.content.startswith("\n  <div>")
    assert '<template v-if="ok"><span>是</span></template>' in d.template.content
    assert d.template.content.endswith("</div>\n")
    assert d.script.content == "\nexport default { name: 'Demo' }\n"
    assert [s.scoped for s in d.styles] == [True, False]
    assert [s.lang for s in d.styles] == [None, "scss"]


def test_missing_blocks():
    d = parse_component("<template><p>x</p></template>")
    assert d.script is None
    assert d.styles == []

    d = parse_component("<script>const a = '<template>'</script>")
    assert d.template is None
    assert d.script.content == "const a = '<template>'"


def test_script_setup_kept_alongside_plain_script():
    d = parse_component('<script>export default {}</script>\n<script setup lang="ts">const x = 1</script>')
    assert len(d.scripts) == 2
    assert d.script.setup is False
    assert d.scripts[1].setup is True
    assert d.scripts[1].lang == "ts"


def test_custom_blocks_ignored():
    d = parse_component('<i18n lang="json">{"a": 1}</i18n><template><b>x</b></template>')
    assert d.template.content == "<b>x</b>"


@pytest.mark.parametrize("source", [
    "<template><div>未闭合</div>",
    "<template><p>x</p></template><script>let a = 1",
    "<!-- never closed <template></template>",
    "<template>a</template><template>b</template>",
])
def test_malformed_components(source):
    with pytest.raises(SegmentParseError):
        parse_component(source, "Broken.vue")


def test_parse_block_attrs():
    assert parse_block_attrs(' setup lang="ts" src=\'./a.ts\' x=y') == {
        "setup": "", "lang": "ts", "src": "./a.ts", "x": "y",
    }
