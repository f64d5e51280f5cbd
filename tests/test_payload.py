from cyselenium.context import TranslationContext
from cyselenium.payload import build_payload
from cyselenium.source import parse_source, walk


def _object(src: str):
    tree = parse_source(f"x = {src}")
    return next(n for n in walk(tree.root_node) if n.type == "object")


def test_flat_object():
    ctx = TranslationContext()
    payload = build_payload(_object("{ a: 1, name: 'bob' }"), ctx)
    assert payload.statements == [
        "JsonObject jsonObject0 = new JsonObject()",
        'jsonObject0.addProperty("a", 1)',
        'jsonObject0.addProperty("name", "bob")',
        "String inputString0 = jsonObject0.toString()",
    ]
    assert payload.root == "jsonObject0"
    assert payload.output == "inputString0"


def test_nested_object_and_array():
    ctx = TranslationContext()
    payload = build_payload(_object("{ user: { name: 'bob', tags: ['a', 1] }, active: true }"), ctx)
    assert payload.statements == [
        "JsonObject jsonObject0 = new JsonObject()",
        "JsonObject userInner1 = new JsonObject()",
        'userInner1.addProperty("name", "bob")',
        "JsonArray tagsInner2 = new JsonArray()",
        'tagsInner2.add("a")',
        "tagsInner2.add(1)",
        'userInner1.add("tags", tagsInner2)',
        'jsonObject0.add("user", userInner1)',
        'jsonObject0.addProperty("active", true)',
        "String inputString0 = jsonObject0.toString()",
    ]


def test_quoted_keys_become_identifiers_for_temps():
    ctx = TranslationContext()
    payload = build_payload(_object("{ 'content-type': { a: null } }"), ctx)
    assert "JsonObject content_typeInner1 = new JsonObject()" in payload.statements
    assert 'content_typeInner1.add("a", JsonNull.INSTANCE)' in payload.statements
    assert 'jsonObject0.add("content-type", content_typeInner1)' in payload.statements


def test_shorthand_and_spread():
    ctx = TranslationContext()
    payload = build_payload(_object("{ email, ...defaults }"), ctx)
    assert 'jsonObject0.addProperty("email", email)' in payload.statements
    assert "/* unsupported body member: ...defaults */" in payload.statements
    assert ctx.diagnostics[0].kind == "unsupported-body"


def test_temp_names_follow_the_shared_counter():
    ctx = TranslationContext()
    ctx.next_index()
    ctx.next_index()
    first = build_payload(_object("{ a: { b: 1 } }"), ctx)
    second = build_payload(_object("{ a: { b: 1 } }"), ctx)
    assert first.root == "jsonObject2"
    assert "JsonObject aInner3 = new JsonObject()" in first.statements
    assert second.root == "jsonObject4"
    assert second.output == "inputString4"
