from cyselenium.literals import _unescape, java_string, key_text, render, string_value
from cyselenium.source import parse_source


def _arg(src: str):
    # first argument of the first call in src
    tree = parse_source(src)
    call = tree.root_node.named_children[0].named_children[0]
    return call.child_by_field_name("arguments").named_children[0]


def test_java_string_escapes():
    assert java_string('say "hi"') == '"say \\"hi\\""'
    assert java_string("a\\b") == '"a\\\\b"'
    assert java_string("line1\nline2\t") == '"line1\\nline2\\t"'


def test_unescape_js_sequences():
    assert _unescape(r"it\'s") == "it's"
    assert _unescape(r"é\x41\n") == "éA\n"
    assert _unescape(r"\u{1F600}") == "\U0001F600"


def test_single_and_double_quoted_strings():
    assert render(_arg("f('#login')")) == '"#login"'
    assert render(_arg('f("it\'s")')) == '"it\'s"'
    assert render(_arg("f('say \"hi\"')")) == '"say \\"hi\\""'


def test_non_literal_is_verbatim():
    assert render(_arg("f(user.name)")) == "user.name"
    assert render(_arg("f(42)")) == "42"


def test_template_becomes_concatenation():
    assert render(_arg("f(`/users/${id}/edit`)")) == '"/users/" + id + "/edit"'


def test_template_starting_with_substitution_stays_a_string():
    assert render(_arg("f(`${n}px`)")) == '"" + n + "px"'


def test_template_without_substitutions():
    assert render(_arg("f(`plain`)")) == '"plain"'
    assert string_value(_arg("f(`plain`)")) == "plain"
    assert string_value(_arg("f(`a${b}`)")) is None


def test_special_keys_are_spliced():
    node = _arg("f('hello{enter}')")
    assert render(node, special_keys=True) == '"hello" + Keys.ENTER'
    # without the flag the token is plain text
    assert render(node) == '"hello{enter}"'


def test_special_key_alone_and_case_insensitive():
    assert render(_arg("f('{Enter}')"), special_keys=True) == "Keys.ENTER"
    assert render(_arg("f('{backspace}{backspace}x')"), special_keys=True) == \
        '"" + Keys.BACK_SPACE + Keys.BACK_SPACE + "x"'


def test_special_key_leading_non_string_gets_string_seed():
    assert render(_arg("f(`{selectall}${v}`)"), special_keys=True) == '"{selectall}" + v'
    assert render(_arg("f(`{tab}${v}`)"), special_keys=True) == '"" + Keys.TAB + v'


def test_empty_string():
    assert render(_arg("f('')")) == '""'


def test_key_text_strips_quotes():
    tree = parse_source("x = { 'content-type': 1, plain: 2 }")
    obj = tree.root_node.named_children[0].named_children[0].child_by_field_name("right")
    keys = [key_text(pair.child_by_field_name("key")) for pair in obj.named_children]
    assert keys == ["content-type", "plain"]
