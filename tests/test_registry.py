from cyselenium.registry import CommandRegistry
from cyselenium.verbs import Verb, classify


def test_order_is_insertion_order_and_duplicates_collapse():
    reg = CommandRegistry(["login", "seed", "login", "", "  "])
    assert reg.names == ["login", "seed"]
    assert len(reg) == 2
    assert "seed" in reg
    assert "visit" not in reg


def test_save_and_load(tmp_path):
    path = tmp_path / "out" / "commands.txt"
    CommandRegistry(["b", "a", "c"]).save(path)
    assert path.read_text(encoding="utf-8") == "b\na\nc"
    assert CommandRegistry.load(path).names == ["b", "a", "c"]


def test_missing_file_is_empty(tmp_path):
    assert CommandRegistry.load(tmp_path / "nope.txt").names == []


def test_load_tolerates_trailing_newline(tmp_path):
    path = tmp_path / "commands.txt"
    path.write_text("login\nlogout\n", encoding="utf-8")
    assert list(CommandRegistry.load(path)) == ["login", "logout"]


def test_classify():
    reg = CommandRegistry(["login"])
    assert classify("get", reg) is Verb.GET
    assert classify("and", reg) is Verb.AND
    assert classify("login", reg) is Verb.CUSTOM
    assert classify("bogus", reg) is Verb.UNKNOWN
    # the placeholder values are not verbs
    assert classify("<custom>", reg) is Verb.UNKNOWN
